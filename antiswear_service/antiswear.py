"""Recognition of obscene words with protection against common distortions."""
from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Whole-string pass looks at no more than this many code points.
WHOLE_STRING_LIMIT = 10


class DescriptorError(ValueError):
    """Raised when a profile descriptor cannot be built."""


class Mode(enum.Enum):
    """How a normalized candidate is compared against a dictionary word.

    For the ``short`` list STARTSWITH is replaced by EQUALS to avoid
    accidental triggers on similar words.
    """
    CONTAINS = "contains"
    STARTSWITH = "startswith"
    ENDSWITH = "endswith"
    EQUALS = "equals"

    def matches(self, value: str, word: str) -> bool:
        if self is Mode.STARTSWITH:
            return value.startswith(word)
        if self is Mode.CONTAINS:
            return word in value
        if self is Mode.ENDSWITH:
            return value.endswith(word)
        return value == word


@dataclass(frozen=True)
class Replacement:
    source: str
    into: str


NOOP_TABLE: Tuple[Replacement, ...] = (Replacement("", ""),)


def parse_table(value: str) -> Tuple[Replacement, ...]:
    """Parse ``"<from>-<into> <from>-<into>"`` into a table, longest ``from`` first."""
    items = value.split()
    if not items:
        return NOOP_TABLE
    rules: List[Replacement] = []
    for item in items:
        source, sep, into = item.partition("-")
        if not sep or not source:
            raise DescriptorError(f"Malformed substitution pair: {item!r}")
        rules.append(Replacement(source, into))
    # sorted() is stable, so equal lengths keep declaration order
    return tuple(sorted(rules, key=lambda r: len(r.source), reverse=True))


def apply_table(table: Iterable[Replacement], word: str) -> str:
    out = word
    for rule in table:
        if rule.source:
            out = out.replace(rule.source, rule.into)
    return out


def collapse_repeats(word: str) -> str:
    """Drop every character equal to its predecessor in ``word``."""
    return "".join(ch for i, ch in enumerate(word) if i == 0 or word[i - 1] != ch)


def split_words(value: str) -> Tuple[str, ...]:
    return tuple(value.split())


def combine_prefixes(first: Iterable[str], second: Iterable[str]) -> Tuple[str, ...]:
    """Roots from ``second`` followed by every ``first + second`` combination."""
    second = tuple(second)
    out = list(second)
    for head in first:
        out.extend(head + root for root in second)
    return tuple(out)


def is_run_together(tokens: List[str]) -> bool:
    # a single word, or a word spelled out letter by letter ("f u c k")
    return sum(1 for t in tokens if len(t) > 1) <= 1


@dataclass(frozen=True)
class Analyze:
    word: str
    index: int


@dataclass(frozen=True)
class Antiswear:
    """A language profile: alphabet, substitution tables, word lists and mode."""
    bypasses: Tuple[Replacement, ...] = NOOP_TABLE
    prefixes: Tuple[str, ...] = ()
    short: Tuple[str, ...] = ()
    alphabet: frozenset = frozenset()
    replacements: Tuple[Replacement, ...] = NOOP_TABLE
    exceptions: Tuple[str, ...] = ()
    mode: Mode = Mode.STARTSWITH

    def replace_bypasses(self, word: str) -> str:
        return apply_table(self.bypasses, collapse_repeats(word))

    def replace_replacements(self, word: str) -> str:
        return apply_table(self.replacements, word)

    def variants(self, word: str) -> Tuple[str, str, str, str]:
        word = word.lower()
        replaced = self.replace_replacements(word)
        bypassed = self.replace_bypasses(word)
        return (
            replaced,
            bypassed,
            self.replace_bypasses(replaced),
            self.replace_replacements(bypassed),
        )

    def filter_alphabet(self, word: str) -> str:
        return "".join(ch for ch in word if ch in self.alphabet)

    def is_swear(self, candidate: str) -> bool:
        word = self.filter_alphabet(candidate)

        for exception in self.exceptions:
            if self.mode.matches(word, exception):
                return False

        for prefix in self.prefixes:
            if word.startswith(prefix):
                return True

        short_mode = Mode.EQUALS if self.mode is Mode.STARTSWITH else self.mode
        return any(short_mode.matches(word, check) for check in self.short)

    def _hit(self, word: str) -> bool:
        return any(self.is_swear(v) for v in self.variants(word))

    def check(self, text: str) -> Optional[Analyze]:
        """Return the first flagged word of ``text`` with its token index.

        >>> from profiles import en
        >>> en().check("what the fuck")
        Analyze(word='fuck', index=2)
        """
        tokens = text.split()

        if is_run_together(tokens):
            joined = "".join(tokens)[:WHOLE_STRING_LIMIT]
            if joined and self._hit(joined):
                logger.debug("Whole-string hit on %r", joined)
                return Analyze(word=joined, index=0)

        for i, token in enumerate(tokens):
            if self._hit(token):
                logger.debug("Token hit on %r at %d", token, i)
                return Analyze(word=token, index=i)

        return None


@dataclass(frozen=True)
class Builder:
    """Declarative profile descriptor; word lists are split on whitespace.

    ``prefixes_first`` are glued onto every root of ``prefixes_second``.
    Tables use ``"<from>-<into>"`` pairs, e.g. ``bypasses="4-f 1-i"``.
    """
    bypasses: str = ""
    prefixes_first: str = ""
    prefixes_second: str = ""
    short: str = ""
    alphabet: str = ""
    replacements: str = ""
    exceptions: str = ""
    mode: Mode = Mode.STARTSWITH

    def build(self) -> Antiswear:
        bypasses = parse_table(self.bypasses)
        alphabet = set(self.alphabet)
        for rule in bypasses:
            alphabet.update(rule.source)
        alphabet.add(" ")

        profile = Antiswear(
            bypasses=bypasses,
            prefixes=combine_prefixes(
                split_words(self.prefixes_first),
                split_words(self.prefixes_second),
            ),
            short=split_words(self.short),
            alphabet=frozenset(alphabet),
            replacements=parse_table(self.replacements),
            exceptions=split_words(self.exceptions),
            mode=self.mode,
        )
        logger.debug(
            "Built profile: %d prefixes, %d short words, %d exceptions, mode=%s",
            len(profile.prefixes), len(profile.short), len(profile.exceptions), profile.mode.value,
        )
        return profile


@dataclass(frozen=True)
class AntiswearGroup:
    """Several languages at once; earlier profiles take priority."""
    elems: Tuple[Antiswear, ...] = field(default_factory=tuple)

    def check(self, text: str) -> Optional[Analyze]:
        for antiswear in self.elems:
            result = antiswear.check(text)
            if result is not None:
                return result
        return None
