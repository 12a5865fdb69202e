"""Code elements: program entities a comment can refer to.

Every element carries the identifiers a writer might use for it in prose and
the Java expression it translates to. The variants form a closed set
(``ElementKind``); expressions are composed per kind by
``compose_expression``.
"""
import logging
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

from .distance import levenshtein
from .program_model import FieldInfo, MethodInfo, TypeInfo, simple_name

logger = logging.getLogger(__name__)


class ElementKind(Enum):
    TYPE = 'type'
    PARAMETER = 'parameter'
    METHOD = 'method'
    STATIC_METHOD = 'static_method'
    FIELD = 'field'
    DERIVED = 'derived'


@dataclass(frozen=True)
class CodeElement:
    """One candidate. Equality and hashing use ``kind`` and ``key`` only.

    ``value_type`` is the static type of the value the expression denotes
    (the type itself, the parameter's type, a method's return type, a
    field's type); it is ``None`` for derived elements.
    """
    kind: ElementKind
    key: tuple
    identifiers: Tuple[str, ...] = field(compare=False)
    expression: str = field(compare=False)
    value_type: Optional[str] = field(default=None, compare=False)
    index: Optional[int] = field(default=None, compare=False)
    source: object = field(default=None, compare=False, repr=False)

    def distance(self, text: str) -> int:
        if not self.identifiers:
            return sys.maxsize
        text = text.lower()
        return min(levenshtein(i.lower(), text) for i in self.identifiers)


def compose_expression(kind: ElementKind, name: str = '', receiver: str = '',
                       args: Sequence[str] = ()) -> str:
    if kind is ElementKind.TYPE:
        return receiver
    if kind in (ElementKind.METHOD, ElementKind.STATIC_METHOD):
        return f"{receiver}.{name}({', '.join(args)})"
    if kind is ElementKind.FIELD:
        return f"{receiver}.{name}"
    # parameters and derived elements carry their expression as the name
    return name


def type_identifiers(type_name: str) -> Tuple[str, ...]:
    """Simple name plus its last CamelCase word: ``ByteBuffer`` -> (ByteBuffer, Buffer)."""
    name = simple_name(type_name)
    words = re.split(r'(?<!^)(?=[A-Z][a-z])', name)
    if len(words) > 1 and words[-1]:
        return (name, words[-1])
    return (name,)


def type_element(type_info: TypeInfo, receiver: str) -> CodeElement:
    return CodeElement(
        kind=ElementKind.TYPE,
        key=(type_info.name,),
        identifiers=type_identifiers(type_info.name),
        expression=compose_expression(ElementKind.TYPE, receiver=receiver),
        value_type=type_info.name,
        source=type_info,
    )


def parameter_element(name: str, index: int, type_name: str, mined: Iterable[str] = (),
                      style: str = 'name') -> CodeElement:
    identifiers = (name,) + tuple(i for i in sorted(set(mined)) if i != name)
    shown = name if style == 'name' else f"args[{index}]"
    return CodeElement(
        kind=ElementKind.PARAMETER,
        key=(index, type_name),
        identifiers=identifiers,
        expression=compose_expression(ElementKind.PARAMETER, name=shown),
        value_type=type_name,
        index=index,
    )


def method_element(method: MethodInfo, receiver: str, args: Sequence[str] = ()) -> CodeElement:
    return CodeElement(
        kind=ElementKind.METHOD,
        key=(method.generic_string(), receiver, tuple(args)),
        identifiers=(method.name,),
        expression=compose_expression(ElementKind.METHOD, method.name, receiver, args),
        value_type=method.return_type,
        source=method,
    )


def static_method_element(method: MethodInfo, args: Sequence[str] = ()) -> CodeElement:
    receiver = simple_name(method.declaring_type)
    return CodeElement(
        kind=ElementKind.STATIC_METHOD,
        key=(method.generic_string(), tuple(args)),
        identifiers=(method.name,),
        expression=compose_expression(ElementKind.STATIC_METHOD, method.name, receiver, args),
        value_type=method.return_type,
        source=method,
    )


def field_element(field_info: FieldInfo, receiver: str) -> CodeElement:
    return CodeElement(
        kind=ElementKind.FIELD,
        key=(field_info.declaring_type, field_info.name, receiver),
        identifiers=(field_info.name,),
        expression=compose_expression(ElementKind.FIELD, field_info.name, receiver),
        value_type=field_info.type,
        source=field_info,
    )


def derived_element(expression: str, identifier: str) -> CodeElement:
    return CodeElement(
        kind=ElementKind.DERIVED,
        key=(expression,),
        identifiers=(identifier,),
        expression=compose_expression(ElementKind.DERIVED, name=expression),
    )


class CandidatePool:
    """Insertion-ordered set of code elements for one documented member."""

    def __init__(self, elements: Iterable[CodeElement] = ()):
        self._elements: Dict[CodeElement, CodeElement] = {}
        for e in elements:
            self.add(e)

    def add(self, element: CodeElement) -> bool:
        if not any(element.identifiers):
            logger.debug('Dropping %s element without identifiers: %s',
                         element.kind.value, element.expression)
            return False
        if element in self._elements:
            return False
        self._elements[element] = element
        return True

    def of_kind(self, kind: ElementKind):
        return [e for e in self._elements if e.kind is kind]

    def __iter__(self) -> Iterator[CodeElement]:
        return iter(list(self._elements))

    def __len__(self) -> int:
        return len(self._elements)

    def __contains__(self, element) -> bool:
        return element in self._elements

    def __repr__(self):
        return f"CandidatePool({[e.expression for e in self._elements]!r})"
