# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Model assembler: turns CML source text into a ContextMappingModel.

The traversal order is fixed: the context map first, then every bounded
context and, inside each, its aggregates with their entities, value objects,
services, commands and events (in that order). Domains and user requirements
are read last. Every node is built from its already-built children, so the
resulting tree is never mutated after construction.
"""

import logging
from dataclasses import dataclass, field

from cmlmodel.model.entities import (
    Aggregate,
    BoundedContext,
    BoundedContextType,
    CommandEvent,
    ContextMap,
    ContextMappingModel,
    ContextMapState,
    ContextMapType,
    Domain,
    DomainEvent,
    Entity,
    Evolution,
    KnowledgeLevel,
    Service,
    Subdomain,
    SubdomainType,
    UseCase,
    UserRequirement,
    UserStory,
    ValueObject,
    Volatility,
)
from cmlmodel.model.relationships import Relationship
from cmlmodel.parser.fields import Members, extract_members, extract_service_operations
from cmlmodel.parser.lexer import Token, TokenType, tokenize
from cmlmodel.parser.outcome import Matched, Skipped
from cmlmodel.parser.preprocessor import strip_comments
from cmlmodel.parser.relationships import parse_relationships
from cmlmodel.parser.scanner import Block, find_blocks
from cmlmodel.parser.settings import enum_setting, list_setting, string_setting, word_setting

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised in strict mode for the first fragment the parser had to drop.

    Attributes:
        line: 1-based line number of the fragment (in the comment-free text).
        column: 1-based column number of the fragment.
        fragment: The dropped source text.
    """

    def __init__(self, message: str, line: int, column: int, fragment: str = "") -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column
        self.fragment = fragment


@dataclass
class ParseReport:
    """The model of a document together with everything that was dropped from it."""

    model: ContextMappingModel
    skipped: list[Skipped] = field(default_factory=list)


def parse(source: str, *, strict: bool = False) -> ContextMappingModel:
    """Parse CML source text into a ContextMappingModel.

    By default the parser is total: malformed fragments are left out of the
    model and no exception is raised for any input string.

    Args:
        source: The full text of a .cml document.
        strict: Raise on the first dropped fragment instead of omitting it.

    Returns:
        A new, independent model tree.

    Raises:
        ParseError: Only when *strict* is True and a fragment was dropped.
    """
    report = parse_with_report(source)
    if strict and report.skipped:
        first = report.skipped[0]
        raise ParseError(first.reason, first.line, first.column, first.fragment)
    return report.model


def parse_with_report(source: str) -> ParseReport:
    """Parse CML source text and also return the dropped fragments.

    Never raises.
    """
    assembler = _Assembler(strip_comments(source))
    model = assembler.assemble()
    relationships = len(model.context_map.relationships) if model.context_map else 0
    logger.debug(
        "Parsed %d bounded context(s) and %d relationship(s), skipped %d fragment(s)",
        len(model.bounded_contexts),
        relationships,
        len(assembler.skipped),
    )
    return ParseReport(model=model, skipped=assembler.skipped)


# ################
# Implementation
# ################

_ENTITY_FLAGS = frozenset({"aggregateRoot"})
_VALUE_OBJECT_FLAGS = frozenset({"immutable", "persistent"})
_EVENT_FLAGS = frozenset({"persistent"})

_ARTICLES = frozenset({"a", "an"})


class _Assembler:
    """Single-use builder walking the blocks of one comment-free document."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = tokenize(text)[:-1]
        self.skipped: list[Skipped] = []

    def assemble(self) -> ContextMappingModel:
        context_map = self._context_map()
        bounded_contexts = [self._bounded_context(b) for b in self._blocks("BoundedContext", self._tokens)]
        domains = [self._domain(b) for b in self._blocks("Domain", self._tokens)]
        return ContextMappingModel(
            context_map=context_map,
            bounded_contexts=bounded_contexts,
            domains=domains,
            user_requirements=self._user_requirements(),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _blocks(
        self,
        keyword: str,
        tokens: list[Token] | tuple[Token, ...],
        *,
        name_optional: bool = False,
    ) -> list[Block]:
        blocks: list[Block] = []
        for outcome in find_blocks(keyword, list(tokens), self._text, name_optional=name_optional):
            if isinstance(outcome, Matched):
                blocks.append(outcome.value)
            else:
                self._skip(outcome)
        return blocks

    def _skip(self, skipped: Skipped) -> None:
        logger.debug("Skipped %s at line %d: %s", skipped.reason, skipped.line, skipped.fragment)
        self.skipped.append(skipped)

    def _members(self, block: Block, flags: frozenset[str], *, with_operations: bool = True) -> Members:
        members = extract_members(block.lines(), flags=flags, with_operations=with_operations)
        for skipped in members.skipped:
            self._skip(skipped)
        return members

    # ------------------------------------------------------------------
    # Strategic design
    # ------------------------------------------------------------------

    def _context_map(self) -> ContextMap | None:
        blocks = self._blocks("ContextMap", self._tokens, name_optional=True)
        if not blocks:
            return None
        if len(blocks) > 1:
            logger.debug("Ignoring %d additional context map(s)", len(blocks) - 1)
        block = blocks[0]
        own = _own_tokens(block)
        relationships: list[Relationship] = []
        for outcome in parse_relationships(list(block.tokens)):
            if isinstance(outcome, Matched):
                relationships.append(outcome.value)
            else:
                self._skip(outcome)
        return ContextMap(
            name=block.name,
            type=enum_setting(own, "type", ContextMapType),
            state=enum_setting(own, "state", ContextMapState),
            bounded_contexts=list_setting(own, "contains"),
            relationships=relationships,
        )

    def _bounded_context(self, block: Block) -> BoundedContext:
        own = _own_tokens(block)
        return BoundedContext(
            name=block.name or "",
            type=enum_setting(own, "type", BoundedContextType),
            domain_vision_statement=string_setting(own, "domainVisionStatement"),
            responsibilities=list_setting(own, "responsibilities", strings_only=True),
            implementation_technology=string_setting(own, "implementationTechnology"),
            knowledge_level=enum_setting(own, "knowledgeLevel", KnowledgeLevel),
            business_model=string_setting(own, "businessModel"),
            evolution=enum_setting(own, "evolution", Evolution),
            aggregates=[self._aggregate(b) for b in self._blocks("Aggregate", block.tokens)],
        )

    def _domain(self, block: Block) -> Domain:
        own = _own_tokens(block)
        subdomains = []
        for sub in self._blocks("Subdomain", block.tokens):
            sub_own = _own_tokens(sub)
            subdomains.append(
                Subdomain(
                    name=sub.name or "",
                    type=enum_setting(sub_own, "type", SubdomainType),
                    domain_vision_statement=string_setting(sub_own, "domainVisionStatement"),
                )
            )
        return Domain(
            name=block.name or "",
            domain_vision_statement=string_setting(own, "domainVisionStatement"),
            subdomains=subdomains,
        )

    # ------------------------------------------------------------------
    # Tactical design
    # ------------------------------------------------------------------

    def _aggregate(self, block: Block) -> Aggregate:
        own = _own_tokens(block)
        tokens = block.tokens
        entities = [self._entity(b) for b in self._blocks("Entity", tokens)]
        value_objects = [self._value_object(b) for b in self._blocks("ValueObject", tokens)]
        services = [self._service(b) for b in self._blocks("Service", tokens)]
        commands = [self._command(b) for b in self._blocks("CommandEvent", tokens)]
        events = [self._event(b) for b in self._blocks("DomainEvent", tokens)]
        return Aggregate(
            name=block.name or "",
            responsibilities=list_setting(own, "responsibilities", strings_only=True),
            user_requirements=[
                *list_setting(own, "userRequirements"),
                *list_setting(own, "useCases"),
                *list_setting(own, "userStories"),
            ],
            owner=word_setting(own, "owner"),
            knowledge_level=enum_setting(own, "knowledgeLevel", KnowledgeLevel),
            likelihood_for_change=enum_setting(own, "likelihoodForChange", Volatility),
            content_volatility=enum_setting(own, "contentVolatility", Volatility),
            entities=entities,
            value_objects=value_objects,
            services=services,
            commands=commands,
            events=events,
        )

    def _entity(self, block: Block) -> Entity:
        members = self._members(block, _ENTITY_FLAGS)
        return Entity(
            name=block.name or "",
            is_abstract=block.is_abstract,
            extends=block.extends,
            is_aggregate_root="aggregateRoot" in members.flags,
            attributes=members.attributes,
            references=members.references,
            operations=members.operations,
        )

    def _value_object(self, block: Block) -> ValueObject:
        members = self._members(block, _VALUE_OBJECT_FLAGS)
        return ValueObject(
            name=block.name or "",
            is_abstract=block.is_abstract,
            extends=block.extends,
            is_immutable="immutable" in members.flags,
            is_persistent="persistent" in members.flags,
            attributes=members.attributes,
            references=members.references,
            operations=members.operations,
        )

    def _service(self, block: Block) -> Service:
        operations, skipped = extract_service_operations(block.lines())
        for fragment in skipped:
            self._skip(fragment)
        return Service(name=block.name or "", operations=operations)

    def _command(self, block: Block) -> CommandEvent:
        members = self._members(block, _EVENT_FLAGS, with_operations=False)
        return CommandEvent(
            name=block.name or "",
            is_abstract=block.is_abstract,
            extends=block.extends,
            is_persistent="persistent" in members.flags,
            attributes=members.attributes,
            references=members.references,
        )

    def _event(self, block: Block) -> DomainEvent:
        members = self._members(block, _EVENT_FLAGS, with_operations=False)
        return DomainEvent(
            name=block.name or "",
            is_abstract=block.is_abstract,
            extends=block.extends,
            is_persistent="persistent" in members.flags,
            attributes=members.attributes,
            references=members.references,
        )

    # ------------------------------------------------------------------
    # Requirements
    # ------------------------------------------------------------------

    def _user_requirements(self) -> list[UserRequirement]:
        found: list[tuple[int, UserRequirement]] = []
        for block in self._blocks("UseCase", self._tokens):
            own = _own_tokens(block)
            use_case = UseCase(
                name=block.name or "",
                actor=string_setting(own, "actor"),
                secondary_actors=list_setting(own, "secondaryActors", strings_only=True),
                benefit=string_setting(own, "benefit"),
                scope=string_setting(own, "scope"),
                level=string_setting(own, "level"),
            )
            found.append((block.line, use_case))
        for block in self._blocks("UserStory", self._tokens):
            own = _own_tokens(block)
            story = UserStory(
                name=block.name or "",
                role=_string_after(own, ("As",)),
                benefit=_string_after(own, ("so", "that")),
            )
            found.append((block.line, story))
        found.sort(key=lambda item: item[0])
        return [requirement for _, requirement in found]


def _own_tokens(block: Block) -> list[Token]:
    return [tok for line in block.lines() for tok in line]


def _string_after(tokens: list[Token], words: tuple[str, ...]) -> str | None:
    """Return the string following a phrase such as ``As a "role"``; articles are skipped."""
    n = len(tokens)
    for start in range(n):
        i = start
        for word in words:
            if i < n and tokens[i].type == TokenType.IDENTIFIER and tokens[i].value == word:
                i += 1
            else:
                break
        else:
            while i < n and tokens[i].type == TokenType.IDENTIFIER and tokens[i].value in _ARTICLES:
                i += 1
            if i < n and tokens[i].type == TokenType.STRING:
                return tokens[i].value
    return None
