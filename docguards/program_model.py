"""Program model: what the translator knows about the program's types.

The translation core never inspects code itself. It asks a ``ProgramModel``
to resolve a type by its qualified name and to list that type's methods,
fields and constructors. ``InMemoryProgramModel`` serves those answers from
type descriptions, typically loaded from a JSON file produced by a separate
extraction step::

    {"types": [
        {"name": "com.example.Buffer",
         "methods": [{"name": "isEmpty", "return_type": "boolean"}],
         "fields": [{"name": "readOnly", "type": "boolean"}]}
    ]}

Type names are Java-style strings: ``int``, ``boolean``, ``byte[]``,
``java.lang.Boolean``, ``com.example.Buffer``.
"""
import json
import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ValidationError

from .errors import ProgramModelError, TypeResolutionError

BOOLEAN_TYPES = ('boolean', 'java.lang.Boolean', 'Boolean')

# Reflection reports these two leading parameters on every enum constructor.
ENUM_SYNTHETIC_PARAMETERS = (
    ('$enum$name', 'java.lang.String'),
    ('$enum$ordinal', 'int'),
)


def is_array_type(type_name: str) -> bool:
    return type_name.endswith('[]')


def is_boolean_type(type_name: str) -> bool:
    return type_name in BOOLEAN_TYPES


def simple_name(type_name: str) -> str:
    """``java.util.Map<K, V>`` -> ``Map``; ``com.example.Outer$Inner`` -> ``Inner``."""
    base = re.sub(r'<.*>', '', type_name)
    base = base.rsplit('.', 1)[-1]
    return base.rsplit('$', 1)[-1]


class ParameterInfo(BaseModel):
    name: str
    type: str


class MethodInfo(BaseModel):
    name: str
    parameters: List[ParameterInfo] = []
    return_type: str = 'void'
    static: bool = False
    public: bool = True
    declaring_type: str = ''

    def parameter_types(self) -> List[str]:
        return [p.type for p in self.parameters]

    def generic_string(self) -> str:
        mods = ('public ' if self.public else '') + ('static ' if self.static else '')
        params = ','.join(self.parameter_types())
        return f"{mods}{self.return_type} {self.declaring_type}.{self.name}({params})"


class ConstructorInfo(BaseModel):
    parameters: List[ParameterInfo] = []
    public: bool = True
    declaring_type: str = ''

    def parameter_types(self) -> List[str]:
        return [p.type for p in self.parameters]

    def generic_string(self) -> str:
        mods = 'public ' if self.public else ''
        return f"{mods}{self.declaring_type}({','.join(self.parameter_types())})"


class FieldInfo(BaseModel):
    name: str
    type: str
    static: bool = False
    public: bool = True
    declaring_type: str = ''


class TypeInfo(BaseModel):
    name: str
    kind: Literal['class', 'interface', 'enum'] = 'class'
    supertypes: List[str] = []
    methods: List[MethodInfo] = []
    fields: List[FieldInfo] = []
    constructors: List[ConstructorInfo] = []

    @property
    def simple_name(self) -> str:
        return simple_name(self.name)

    @property
    def is_enum(self) -> bool:
        return self.kind == 'enum'


Executable = Union[MethodInfo, ConstructorInfo]


class ProgramModel(ABC):
    """Introspection capability the collector and matcher depend on."""

    @abstractmethod
    def resolve_type(self, name: str) -> TypeInfo:
        """Return the type named ``name`` or raise ``TypeResolutionError``."""

    @abstractmethod
    def list_methods(self, type_info: TypeInfo, public_only: bool = True) -> List[MethodInfo]:
        ...

    @abstractmethod
    def list_fields(self, type_info: TypeInfo, public_only: bool = True) -> List[FieldInfo]:
        ...

    @abstractmethod
    def list_constructors(self, type_info: TypeInfo) -> List[ConstructorInfo]:
        ...

    def same_signature(self, a: Executable, b: Executable) -> bool:
        return type(a) is type(b) and a.generic_string() == b.generic_string()

    def find_executable(self, type_info: TypeInfo, name: str, parameter_types: List[str],
                        constructor: bool = False) -> Optional[Executable]:
        """Locate a declared constructor or method by name and source parameter types."""
        if constructor:
            skip = len(ENUM_SYNTHETIC_PARAMETERS) if type_info.is_enum else 0
            for c in self.list_constructors(type_info):
                if c.parameter_types()[skip:] == list(parameter_types):
                    return c
            return None
        for m in self.list_methods(type_info, public_only=False):
            if m.name == name and m.parameter_types() == list(parameter_types):
                return m
        return None


class InMemoryProgramModel(ProgramModel):
    def __init__(self, types: Iterable[TypeInfo] = ()):
        self.types: Dict[str, TypeInfo] = {}
        for t in types:
            self.add_type(t)

    def add_type(self, type_info: TypeInfo):
        # members default to being declared by the type that lists them
        for m in type_info.methods:
            m.declaring_type = m.declaring_type or type_info.name
        for f in type_info.fields:
            f.declaring_type = f.declaring_type or type_info.name
        for c in type_info.constructors:
            c.declaring_type = c.declaring_type or type_info.name
        self.types[type_info.name] = type_info

    @classmethod
    def from_dict(cls, data: dict) -> 'InMemoryProgramModel':
        try:
            types = [TypeInfo.model_validate(t) for t in data.get('types', [])]
        except ValidationError as e:
            raise ProgramModelError(f"Invalid type description: {e}") from e
        return cls(types)

    @classmethod
    def from_json_file(cls, path: str) -> 'InMemoryProgramModel':
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ProgramModelError(f"Cannot read program description {path}: {e}") from e
        return cls.from_dict(data)

    def resolve_type(self, name: str) -> TypeInfo:
        try:
            return self.types[name]
        except KeyError:
            raise TypeResolutionError(name) from None

    def _lineage(self, type_info: TypeInfo) -> List[TypeInfo]:
        """The type followed by its known supertypes, nearest first."""
        seen = []
        pending = [type_info]
        while pending:
            t = pending.pop(0)
            if any(s.name == t.name for s in seen):
                continue
            seen.append(t)
            for sup in t.supertypes:
                if sup in self.types:
                    pending.append(self.types[sup])
        return seen

    def list_methods(self, type_info: TypeInfo, public_only: bool = True) -> List[MethodInfo]:
        out: List[MethodInfo] = []
        keys = set()
        for i, t in enumerate(self._lineage(type_info)):
            for m in t.methods:
                if public_only and not m.public:
                    continue
                if i > 0 and not m.public:
                    continue
                key = (m.name, tuple(m.parameter_types()))
                if key in keys:
                    continue
                keys.add(key)
                out.append(m)
        return out

    def list_fields(self, type_info: TypeInfo, public_only: bool = True) -> List[FieldInfo]:
        out: List[FieldInfo] = []
        names = set()
        for i, t in enumerate(self._lineage(type_info)):
            for f in t.fields:
                if (public_only or i > 0) and not f.public:
                    continue
                if f.name in names:
                    continue
                names.add(f.name)
                out.append(f)
        return out

    def list_constructors(self, type_info: TypeInfo) -> List[ConstructorInfo]:
        if not type_info.is_enum:
            return list(type_info.constructors)
        synthetic = [ParameterInfo(name=n, type=t) for n, t in ENUM_SYNTHETIC_PARAMETERS]
        return [
            c.model_copy(update={'parameters': synthetic + list(c.parameters)})
            for c in type_info.constructors
        ]
