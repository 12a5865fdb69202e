"""Match proposition subjects and predicates to code elements.

``match_subject`` finds the code elements a subject names.
``match_predicate`` turns a predicate about such an element into a Java
boolean expression, first through a small catalogue of literal patterns
("is null", "is positive", ">= 3", "instanceof Foo"), then by looking for a
boolean-valued member reachable from the subject.
"""
import logging
import re
from typing import List, Optional

from .code_elements import (
    CodeElement,
    ElementKind,
    derived_element,
    field_element,
    method_element,
    static_method_element,
)
from .collector import CodeElementCollector
from .config import TranslatorSettings
from .distance import closest
from .doc_model import DocumentedMember
from .errors import TypeResolutionError
from .program_model import ProgramModel, is_array_type, is_boolean_type

logger = logging.getLogger(__name__)

_WORDS = r'(?<![\w-])(true|false|null|zero|strictly positive|positive|strictly negative|negative)\b'
IS_NOT_WORD = re.compile(r'(?:is |are )?(?:not |!= ?)' + _WORDS)
IS_WORD = re.compile(r'(?:is |are )?(?:==|=)? ?' + _WORDS)
NUMBER_RELATION = re.compile(r'(?:is |are )?(<=|>=|<|>|!=|==|=)? ?(?<![\w.])(-?[0-9]+)(?![\w.])')
# "non-null", "nonzero": the prefix negates the word
NON_WORD = re.compile(r'\bnon-?(null|zero|positive|negative)\b')
INSTANCE_OF = re.compile(r'instanceof (.*)')

# longest phrases first so "greater than or equal to" is not read as "greater than"
VERBAL_RELATIONS = [
    ('greater than or equal to', '>='),
    ('less than or equal to', '<='),
    ('greater than', '>'),
    ('less than', '<'),
    ('equal to', '=='),
]

INT_MIN, INT_MAX = -2 ** 31, 2 ** 31 - 1

SUBJECT_PREFIXES = ('either ', 'both ')


def clean_subject(subject: str) -> str:
    """Drop one leading "either "/"both " and surrounding whitespace."""
    for prefix in SUBJECT_PREFIXES:
        if subject.startswith(prefix):
            subject = subject[len(prefix):]
            break
    return subject.strip()


def _word_suffix(word: str, negated: bool) -> str:
    if word in ('true', 'false', 'null'):
        return ('!=' if negated else '==') + word
    if word == 'zero':
        return '!=0' if negated else '==0'
    if word.endswith('positive'):
        return '<=0' if negated else '>0'
    return '>=0' if negated else '<0'


def _parse_int_literal(text: str) -> int:
    number = int(text)
    if not INT_MIN <= number <= INT_MAX:
        raise ValueError(f"integer literal out of range: {text}")
    return number


def simple_match(predicate: str) -> Optional[str]:
    """Translate a literal predicate to an expression suffix, or ``None``.

    >>> simple_match('is negative')
    '<0'
    >>> simple_match('instanceof java.util.List')
    ' instanceof java.util.List'
    """
    predicate = predicate.strip()
    m = IS_NOT_WORD.search(predicate)
    if m:
        return _word_suffix(m.group(1), negated=True)
    m = NON_WORD.search(predicate)
    if m:
        return _word_suffix(m.group(1), negated=True)
    m = IS_WORD.search(predicate)
    if m:
        return _word_suffix(m.group(1), negated=False)

    relational = predicate
    for phrase, op in VERBAL_RELATIONS:
        relational = relational.replace(phrase, op)
    m = NUMBER_RELATION.search(relational)
    if m:
        relation, literal = m.group(1), m.group(2)
        try:
            number = _parse_int_literal(literal)
        except ValueError:
            logger.debug('Malformed numeric literal in predicate %r', predicate)
            return None
        if relation is None or relation == '=':
            return f"=={number}"
        return f"{relation}{number}"

    if predicate == 'been set':
        return '!=null'
    m = INSTANCE_OF.search(predicate)
    if m:
        return f" instanceof {m.group(1)}"
    return None


class Matcher:
    def __init__(self, program: ProgramModel, collector: CodeElementCollector,
                 settings: Optional[TranslatorSettings] = None):
        self.program = program
        self.collector = collector
        self.settings = settings or collector.settings

    @property
    def threshold(self) -> int:
        return self.settings.distance_threshold

    def match_subject(self, subject: str, member: DocumentedMember) -> List[CodeElement]:
        """Code elements whose identifiers are closest to ``subject``.

        An empty list means no element is within the distance threshold.
        """
        pool = self.collector.collect(member)
        return closest(clean_subject(subject), pool, self.threshold)

    def match_predicate(self, member: DocumentedMember, subject: CodeElement,
                        predicate: str, negate: bool = False) -> Optional[str]:
        """Translate ``predicate`` about ``subject`` to a Java boolean expression.

        Returns ``None`` when no translation is found.
        """
        suffix = simple_match(predicate)
        if suffix is not None:
            match = subject.expression + suffix
        else:
            candidates = self.predicate_candidates(member, subject, predicate)
            if not candidates:
                return None
            # ties are equally good; the first one found is taken
            match = candidates[0].expression

        if match == f"{self.settings.receiver}==null":
            logger.debug('Rejecting degenerate guard %s', match)
            return None
        if negate:
            match = f"({match}) == false"
        return match

    def predicate_candidates(self, member: DocumentedMember, subject: CodeElement,
                             predicate: str) -> List[CodeElement]:
        """Boolean members reachable from ``subject`` closest to ``predicate``."""
        pool = self.secondary_pool(member, subject)
        return closest(predicate.strip(), pool, self.threshold)

    def secondary_pool(self, member: DocumentedMember, subject: CodeElement) -> List[CodeElement]:
        if subject.kind is ElementKind.PARAMETER:
            elements = self.boolean_elements(subject.expression, subject.value_type)
            elements += self.static_boolean_methods(member.containing_type, subject)
        elif subject.kind in (ElementKind.TYPE, ElementKind.METHOD, ElementKind.STATIC_METHOD):
            elements = self.boolean_elements(subject.expression, subject.value_type)
        else:
            return []
        unique = []
        for e in elements:
            if e not in unique:
                unique.append(e)
        return unique

    def boolean_elements(self, receiver: str, type_name: Optional[str]) -> List[CodeElement]:
        """Boolean fields and zero-argument boolean methods of ``type_name`` on ``receiver``."""
        if not type_name:
            return []
        if is_array_type(type_name):
            return [
                derived_element(f"{receiver}.length==0", 'isEmpty'),
                derived_element(f"{receiver}.length", 'length'),
            ]
        try:
            type_info = self.program.resolve_type(type_name)
        except TypeResolutionError:
            logger.debug('No boolean members for unresolvable type %s', type_name)
            return []
        out = [field_element(f, receiver)
               for f in self.program.list_fields(type_info) if is_boolean_type(f.type)]
        out += [method_element(m, receiver)
                for m in self.program.list_methods(type_info)
                if not m.parameters and is_boolean_type(m.return_type)]
        return out

    def static_boolean_methods(self, containing_type: str, parameter: CodeElement) -> List[CodeElement]:
        """Static boolean methods of the containing type applicable to ``parameter``."""
        try:
            type_info = self.program.resolve_type(containing_type)
        except TypeResolutionError:
            return []
        out = []
        for m in self.program.list_methods(type_info):
            if not m.static or len(m.parameters) > 1 or not is_boolean_type(m.return_type):
                continue
            if any(t != parameter.value_type for t in m.parameter_types()):
                continue
            args = [parameter.expression] if m.parameters else []
            out.append(static_method_element(m, args))
        return out
