"""Propositions: subject/predicate pairs extracted from comment sentences.

Two sources are provided:

- ``SpacyPropositionSource`` reads clauses off a spaCy dependency parse;
- ``PatternPropositionSource`` splits each sentence at its first copula or
  modal verb, which is enough for the terse style of ``@param`` comments and
  needs no language model.
"""
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class Proposition:
    subject: str
    predicate: str
    negated: bool = False
    head: str = ''  # head word of the clause


class PropositionSource(ABC):
    @abstractmethod
    def parse(self, text: str, member=None) -> List[Proposition]:
        """Return one proposition per clause of ``text``."""


# ------------------------------- spaCy ---------------------------------------

SUBJECT_DEPS = ('nsubj', 'nsubjpass', 'csubj')
SKIPPED_DEPS = SUBJECT_DEPS + ('aux', 'auxpass', 'neg', 'punct', 'cc', 'mark')


def _span_text(tokens) -> str:
    return ' '.join(t.text for t in sorted(tokens, key=lambda t: t.i))


def proposition_from_root(root) -> Proposition:
    """Build a proposition from a sentence root of a dependency parse.

    Works on any token-like object exposing ``text``, ``lemma_``, ``dep_``,
    ``i``, ``children`` and ``subtree``.
    """
    children = list(root.children)
    subject = ''
    predicate_tokens = []
    negated = False
    for child in children:
        if child.dep_ in SUBJECT_DEPS and not subject:
            subject = _span_text(child.subtree)
        elif child.dep_ == 'neg':
            negated = True
        elif child.dep_ not in SKIPPED_DEPS:
            predicate_tokens.extend(child.subtree)
    head = root.text
    if root.lemma_ == 'be':
        # copular clause: the complement heads it
        complements = [c for c in children if c.dep_ in ('acomp', 'attr')]
        if complements:
            head = complements[0].text
    else:
        predicate_tokens.append(root)
    return Proposition(
        subject=subject,
        predicate=_span_text(predicate_tokens),
        negated=negated,
        head=head,
    )


class SpacyPropositionSource(PropositionSource):
    def __init__(self, model_name: str = 'en_core_web_sm', nlp=None):
        self.model_name = model_name
        self._nlp = nlp

    @property
    def nlp(self):
        if self._nlp is None:
            logger.info('Loading spaCy pipeline %s', self.model_name)
            try:
                import spacy
                self._nlp = spacy.load(self.model_name)
            except (ImportError, OSError) as e:
                raise ConfigurationError(
                    f"spaCy pipeline {self.model_name!r} is not available ({e}); "
                    "install docguards[nlp] and the model, or use the pattern source") from e
        return self._nlp

    def parse(self, text: str, member=None) -> List[Proposition]:
        if not text or not text.strip():
            return []
        doc = self.nlp(text)
        return [proposition_from_root(sent.root) for sent in doc.sents if sent.text.strip(' .;')]


# ------------------------------- patterns ------------------------------------

_SENTENCE_SPLIT = re.compile(r'\.(?:\s+|$)|;\s*')

VERBS = {
    'is', 'are', 'be', 'been', 'being', 'was', 'were', 'must', 'should', 'will',
    'would', 'may', 'might', 'can', 'could', 'shall', 'has', 'have', 'cannot',
    "can't", "shouldn't", "won't", "mustn't", "isn't", "aren't", 'does', 'do',
}
NEGATIVE_VERBS = {"cannot", "can't", "shouldn't", "won't", "mustn't", "isn't", "aren't"}
NEGATIONS = {'not', 'never'}
DETERMINERS = {'the', 'a', 'an', 'this', 'that', 'these', 'those', 'any', 'each', 'every', 'some'}
PREPOSITIONS = {
    'of', 'in', 'to', 'for', 'with', 'from', 'on', 'at', 'by', 'into', 'as',
    'that', 'which', 'who', 'if', 'when', 'where', 'or', 'and',
}


def split_sentences(text: str) -> List[str]:
    return [s.strip(' ,') for s in _SENTENCE_SPLIT.split(text or '') if s.strip(' ,.;')]


def _clean(word: str) -> str:
    return word.strip('.,;:()"\'')


def noun_phrase_head(words: List[str]) -> str:
    """Last word before the first preposition, skipping leading determiners.

    ``the index of the element`` -> ``index``
    """
    content = []
    for w in (_clean(w) for w in words):
        if not w:
            continue
        if w.lower() in PREPOSITIONS and content:
            break
        if w.lower() in DETERMINERS and not content:
            continue
        content.append(w)
    return content[-1] if content else ''


def _first_verb(words: List[str]) -> Optional[int]:
    for i, w in enumerate(words):
        if _clean(w).lower() in VERBS:
            return i
    return None


class PatternPropositionSource(PropositionSource):
    def parse(self, text: str, member=None) -> List[Proposition]:
        out = []
        for sentence in split_sentences(text):
            prop = self.parse_sentence(sentence)
            if prop is not None:
                out.append(prop)
        return out

    def parse_sentence(self, sentence: str) -> Optional[Proposition]:
        words = sentence.split()
        if not words:
            return None
        start = _first_verb(words)
        if start is None:
            return Proposition(subject=sentence.strip(' ,'), predicate='',
                               head=noun_phrase_head(words))
        end = start
        negated = False
        verb_group = []
        while end < len(words):
            w = _clean(words[end]).lower()
            if w in NEGATIONS or w in NEGATIVE_VERBS:
                negated = True
            elif w not in VERBS:
                break
            verb_group.append(w)
            end += 1
        predicate_words = words[end:]
        # "has been set" keeps "been" so the idiom stays recognisable
        if verb_group[-2:] in (['has', 'been'], ['have', 'been']):
            predicate_words = ['been'] + predicate_words
        predicate = ' '.join(predicate_words).strip(' ,.;')
        subject = ' '.join(words[:start]).strip(' ,')
        content = [_clean(w) for w in predicate_words
                   if _clean(w) and _clean(w).lower() not in DETERMINERS | {'been'}]
        head = content[0] if content else _clean(words[start])
        return Proposition(subject=subject, predicate=predicate, negated=negated, head=head)
