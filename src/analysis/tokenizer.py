"""
Tokenizer and phrase extractor.

Turns raw text into sentences, word tokens and candidate single- and multi-word
terms. Plural word forms are folded to a singular canonical form so that
"Dogs" and "dog" count as the same term.
"""

import re
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Tuple

from .config import ExtractionConfig, DEFAULT_EXTRACTION_CONFIG, INVARIANT_WORDS

SENTENCE_DELIMITERS = re.compile(r"[.!?]+")
WORD_PATTERN = re.compile(r"\w[\w\-]*")

_UNCHANGED_ENDINGS = ("ss", "us", "is", "ous", "ics")
_ES_ENDINGS = ("ches", "shes", "xes", "zes")


def normalize_word(word: str, invariant_words: FrozenSet[str] = INVARIANT_WORDS) -> str:
    """Fold a lower-cased plural word form to its singular form."""
    if len(word) <= 3 or not word[-1] == "s" or not word.isalpha() or word in invariant_words:
        return word
    if word.endswith("ies") and len(word) > 4:
        return word[:-3] + "y"
    if word.endswith("sses"):
        return word[:-2]
    if word.endswith(_ES_ENDINGS):
        return word[:-2]
    if word.endswith(_UNCHANGED_ENDINGS):
        return word
    return word[:-1]


@dataclass
class Token:
    """A word of a sentence, with its position in the sentence."""
    surface: str       # as written
    norm: str          # lower-cased, singular
    start: int         # character offsets in the sentence
    end: int
    initial: bool      # first word of its sentence

    @property
    def lower(self) -> str:
        return self.surface.lower()


@dataclass
class TermCandidate:
    """A unigram or phrase observed once."""
    name: str
    surface: str
    initial: bool


class Tokenizer:
    """Splits text and yields term candidates according to an ExtractionConfig."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or DEFAULT_EXTRACTION_CONFIG

    def split_sentences(self, text: str, min_length: int = 0) -> List[str]:
        sentences = []
        for fragment in SENTENCE_DELIMITERS.split(text):
            fragment = fragment.strip()
            if fragment and len(fragment) >= min_length:
                sentences.append(fragment)
        return sentences

    def tokenize(self, sentence: str) -> List[Token]:
        tokens = []
        for match in WORD_PATTERN.finditer(sentence):
            surface = match.group().rstrip("-")
            if not surface:
                continue
            tokens.append(Token(
                surface=surface,
                norm=normalize_word(surface.lower(), self.config.invariant_words),
                start=match.start(),
                end=match.start() + len(surface),
                initial=not tokens,
            ))
        return tokens

    def is_valid(self, token: Token) -> bool:
        """Stop-word, length and shape filter shared by unigrams and phrase words."""
        lower = token.lower
        stop_words = self.config.stop_words
        if lower in stop_words or token.norm in stop_words:
            return False
        if len(token.norm) < self.config.min_term_length:
            return False
        if lower.isdigit():
            return False
        return lower[0].isalpha()

    def candidate_terms(self, tokens: List[Token]) -> Iterator[TermCandidate]:
        """Unigrams plus every 2..max_phrase_words window of valid words."""
        valid = [self.is_valid(token) for token in tokens]
        for i, token in enumerate(tokens):
            if not valid[i]:
                continue
            yield TermCandidate(token.norm, token.surface, token.initial)
            for size in range(2, self.config.max_phrase_words + 1):
                window = tokens[i:i + size]
                if len(window) < size or not all(valid[i:i + size]):
                    break
                yield TermCandidate(
                    " ".join(t.norm for t in window),
                    " ".join(t.surface for t in window),
                    token.initial,
                )

    def terms(self, text: str) -> Iterator[TermCandidate]:
        for sentence in self.split_sentences(text):
            yield from self.candidate_terms(self.tokenize(sentence))

    def valid_runs(self, tokens: List[Token]) -> List[Tuple[int, int]]:
        """Index ranges [start, end) of consecutive valid tokens."""
        runs = []
        start = None
        for i, token in enumerate(tokens):
            if self.is_valid(token):
                if start is None:
                    start = i
            elif start is not None:
                runs.append((start, i))
                start = None
        if start is not None:
            runs.append((start, len(tokens)))
        return runs
