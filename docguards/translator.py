"""Translate a documented member's comment tags into guard expressions.

Each ``@param`` comment becomes a precondition and each ``@throws`` comment
the condition under which the exception is raised. A proposition either
translates completely or is skipped; a tag whose propositions all fail gets
no condition.
"""
import logging
import re
from typing import List, Optional

from pydantic import BaseModel

from .collector import CodeElementCollector
from .config import TranslatorSettings
from .doc_model import DocumentedMember, ParamTag, ThrowsTag
from .matcher import Matcher
from .normalizer import normalize
from .program_model import ProgramModel
from .propositions import (
    PatternPropositionSource,
    Proposition,
    PropositionSource,
    SpacyPropositionSource,
)

logger = logging.getLogger(__name__)

CONDITION_LEAD = re.compile(r'^\s*(?:if|when|whenever)\s+', re.IGNORECASE)


class Guard(BaseModel):
    kind: str  # 'param' | 'throws'
    target: str  # parameter name or exception type
    comment: str
    condition: Optional[str] = None


class TranslationResult(BaseModel):
    member: str
    preconditions: List[Guard] = []
    throws: List[Guard] = []


def _join(conditions: List[str], operator: str) -> str:
    if len(conditions) == 1:
        return conditions[0]
    return f" {operator} ".join(f"({c})" for c in conditions)


class ConditionTranslator:
    def __init__(self, program: ProgramModel, propositions: PropositionSource,
                 settings: Optional[TranslatorSettings] = None):
        self.settings = settings or TranslatorSettings()
        self.propositions = propositions
        self.collector = CodeElementCollector(program, propositions, self.settings)
        self.matcher = Matcher(program, self.collector, self.settings)

    def translate_proposition(self, member: DocumentedMember, prop: Proposition) -> Optional[str]:
        subjects = self.matcher.match_subject(prop.subject, member)
        if not subjects:
            logger.debug('No subject match for %r in %s', prop.subject, member.signature())
            return None
        conditions = []
        for subject in subjects:
            condition = self.matcher.match_predicate(member, subject, prop.predicate, prop.negated)
            if condition is None:
                logger.debug('No predicate match for %r on %s', prop.predicate, subject.expression)
                return None
            conditions.append(condition)
        operator = '||' if prop.subject.startswith('either ') else '&&'
        return _join(conditions, operator)

    def _translate_text(self, member: DocumentedMember, text: str) -> Optional[str]:
        conditions = []
        for prop in self.propositions.parse(text, member):
            if not prop.predicate:
                continue
            condition = self.translate_proposition(member, prop)
            if condition is not None:
                conditions.append(condition)
        if not conditions:
            return None
        return _join(conditions, '&&')

    def translate_param_tag(self, member: DocumentedMember, tag: ParamTag) -> Guard:
        text = normalize(tag.comment, tag.parameter)
        return Guard(kind='param', target=tag.parameter, comment=tag.comment,
                     condition=self._translate_text(member, text))

    def translate_throws_tag(self, member: DocumentedMember, tag: ThrowsTag) -> Guard:
        text = CONDITION_LEAD.sub('', tag.comment)
        return Guard(kind='throws', target=tag.exception, comment=tag.comment,
                     condition=self._translate_text(member, text))

    def translate(self, member: DocumentedMember) -> TranslationResult:
        return TranslationResult(
            member=member.signature(),
            preconditions=[self.translate_param_tag(member, t) for t in member.param_tags],
            throws=[self.translate_throws_tag(member, t) for t in member.throws_tags],
        )


def build_proposition_source(settings: TranslatorSettings) -> PropositionSource:
    if settings.proposition_source == 'pattern':
        return PatternPropositionSource()
    return SpacyPropositionSource(settings.spacy_model)


def build_translator(program: ProgramModel,
                     settings: Optional[TranslatorSettings] = None) -> ConditionTranslator:
    settings = settings or TranslatorSettings()
    return ConditionTranslator(program, build_proposition_source(settings), settings)
