"""Translate documentation comments into executable guard expressions."""
from .code_elements import CandidatePool, CodeElement, ElementKind
from .collector import CodeElementCollector
from .config import TranslatorSettings, configure_logging, load_settings
from .doc_model import DocParameter, DocumentedMember, ParamTag, ThrowsTag
from .errors import ConfigurationError, DocGuardsError, ProgramModelError, TypeResolutionError
from .matcher import Matcher, clean_subject, simple_match
from .normalizer import normalize
from .program_model import InMemoryProgramModel, ProgramModel, TypeInfo
from .propositions import (
    PatternPropositionSource,
    Proposition,
    PropositionSource,
    SpacyPropositionSource,
)
from .translator import ConditionTranslator, Guard, TranslationResult, build_translator

__version__ = '0.1.0'

__all__ = [
    'CandidatePool', 'CodeElement', 'CodeElementCollector', 'ConditionTranslator',
    'ConfigurationError', 'DocGuardsError', 'DocParameter', 'DocumentedMember', 'ElementKind',
    'Guard', 'InMemoryProgramModel', 'Matcher', 'ParamTag', 'PatternPropositionSource',
    'ProgramModel', 'ProgramModelError', 'Proposition', 'PropositionSource',
    'SpacyPropositionSource', 'ThrowsTag', 'TranslationResult', 'TranslatorSettings',
    'TypeInfo', 'TypeResolutionError', 'build_translator', 'clean_subject', 'configure_logging',
    'load_settings', 'normalize', 'simple_match',
]
