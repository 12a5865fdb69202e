"""Collect the code elements a documented member's comment can refer to.

The pool holds the containing type, the member's parameters, the methods of
the containing type callable with in-scope values, and its fields. It is
rebuilt on every call.
"""
import logging
from collections import Counter
from typing import Dict, List, Optional, Set

from .code_elements import (
    CandidatePool,
    CodeElement,
    field_element,
    method_element,
    parameter_element,
    static_method_element,
    type_element,
)
from .config import TranslatorSettings
from .doc_model import DocumentedMember
from .errors import TypeResolutionError
from .normalizer import normalize
from .program_model import ENUM_SYNTHETIC_PARAMETERS, ProgramModel, TypeInfo
from .propositions import PropositionSource

logger = logging.getLogger(__name__)


class CodeElementCollector:
    def __init__(self, program: ProgramModel, propositions: PropositionSource,
                 settings: Optional[TranslatorSettings] = None):
        self.program = program
        self.propositions = propositions
        self.settings = settings or TranslatorSettings()

    def mine_identifiers(self, member: DocumentedMember, parameter_name: str) -> Set[str]:
        """Head words of the clauses in the parameter's own ``@param`` comments."""
        ids = set()
        for tag in member.param_tags_for(parameter_name):
            text = normalize(tag.comment, parameter_name)
            for prop in self.propositions.parse(text, member):
                if prop.head:
                    ids.add(prop.head)
        return ids

    def collect(self, member: DocumentedMember) -> CandidatePool:
        pool = CandidatePool()
        try:
            containing = self.program.resolve_type(member.containing_type)
        except TypeResolutionError:
            logger.warning('Containing type %s cannot be resolved; no code elements for %s',
                           member.containing_type, member.signature())
            return pool

        executable = self.program.find_executable(
            containing, member.name, member.parameter_types(), constructor=member.is_constructor)
        if executable is None:
            logger.warning('No executable matches %s', member.signature())
            return pool

        receiver = self.settings.receiver
        pool.add(type_element(containing, receiver))

        parameters = list(executable.parameters)
        if containing.is_enum and member.is_constructor:
            parameters = parameters[len(ENUM_SYNTHETIC_PARAMETERS):]

        names = []
        for i, par in enumerate(parameters):
            names.append(member.parameters[i].name if i < len(member.parameters) else par.name)

        mined = {name: self.mine_identifiers(member, name) for name in names}
        # an identifier designates a parameter only if no other parameter produced it
        counts = Counter(i for ids in mined.values() for i in ids)
        params: List[CodeElement] = []
        for i, (name, par) in enumerate(zip(names, parameters)):
            unique = {x for x in mined[name] if counts[x] == 1}
            dropped = mined[name] - unique
            if dropped:
                logger.debug('Ambiguous identifiers dropped from %s: %s', name, sorted(dropped))
            params.append(parameter_element(name, i, par.type, unique,
                                            style=self.settings.parameter_style))
        for p in params:
            pool.add(p)

        in_scope = [containing.name] + [par.type for par in parameters]
        arguments = self._argument_expressions(containing, params, receiver)

        for method in self.program.list_methods(containing):
            if self.program.same_signature(method, executable):
                continue
            if not all(t in in_scope for t in method.parameter_types()):
                continue
            args = [arguments[t] for t in method.parameter_types()]
            if method.static:
                pool.add(static_method_element(method, args))
            elif not member.is_constructor:
                pool.add(method_element(method, receiver, args))

        for f in self.program.list_fields(containing):
            pool.add(field_element(f, receiver))
        return pool

    @staticmethod
    def _argument_expressions(containing: TypeInfo, params: List[CodeElement],
                              receiver: str) -> Dict[str, str]:
        """In-scope type -> expression of the first in-scope value of that type."""
        out = {containing.name: receiver}
        for p in params:
            out.setdefault(p.value_type, p.expression)
        return out

