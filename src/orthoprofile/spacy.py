"""
spaCy integration for orthoprofile.

Provides a pipeline component that segments documents and tokens into
profile graphemes and optionally transliterates them.

Example:
    >>> import spacy
    >>> nlp = spacy.blank("xx")
    >>> nlp.add_pipe("orthography_tokenizer", config={"ordering": []})
    >>> doc = nlp("tschüss")
    >>> doc._.graphemes
    't s c h ü s s'
"""

from typing import Optional, Sequence

from spacy.language import Language
from spacy.tokens import Doc, Token

from orthoprofile._config import DEFAULT_MISSING, DEFAULT_ORDERING, TokenizerConfig
from orthoprofile._tokenize import tokenize
from orthoprofile.profile._io import read_profile
from orthoprofile.rules._rules import read_rules

__all__ = [
    "OrthographyTokenizerComponent",
    "create_orthography_tokenizer",
]


@Language.factory(
    "orthography_tokenizer",
    default_config={
        "profile_path": None,
        "rules_path": None,
        "method": "global",
        "ordering": list(DEFAULT_ORDERING),
        "separator": " ",
        "missing": DEFAULT_MISSING,
        "normalization": "NFC",
        "regex": False,
        "transliterate": None,
        "silent": True,
    },
    assigns=[
        "doc._.graphemes",
        "doc._.transliterated",
        "token._.graphemes",
        "token._.transliterated",
    ],
)
def create_orthography_tokenizer(
    nlp: Language,
    name: str,
    profile_path: Optional[str] = None,
    rules_path: Optional[str] = None,
    method: str = "global",
    ordering: Sequence[str] = DEFAULT_ORDERING,
    separator: str = " ",
    missing: str = DEFAULT_MISSING,
    normalization: Optional[str] = "NFC",
    regex: bool = False,
    transliterate: Optional[str] = None,
    silent: bool = True,
) -> "OrthographyTokenizerComponent":
    """Create an orthography tokenizer pipeline component."""
    config = TokenizerConfig(
        method=method,
        ordering=tuple(ordering),
        separator=separator,
        missing=missing,
        normalization=normalization,
        regex=regex,
        transliterate=transliterate,
        silent=silent,
    )
    return OrthographyTokenizerComponent(
        nlp, name, profile_path=profile_path, rules_path=rules_path, config=config
    )


class OrthographyTokenizerComponent:
    """
    spaCy pipeline component for grapheme tokenization.

    The profile and rules are loaded once, when the component is created.
    Without a profile, every document derives its own from its text.

    Extensions:
        - Doc._.graphemes: Grapheme-separated document text.
        - Doc._.transliterated: Transliterated text (if configured).
        - Token._.graphemes: Grapheme-separated token text.
        - Token._.transliterated: Transliterated token (if configured).
    """

    def __init__(
        self,
        nlp: Language,
        name: str,
        *,
        profile_path: Optional[str] = None,
        rules_path: Optional[str] = None,
        config: Optional[TokenizerConfig] = None,
    ) -> None:
        self.name = name
        self.config = config or TokenizerConfig(silent=True)
        self.profile = read_profile(profile_path) if profile_path else None
        self.rules = read_rules(rules_path) if rules_path else []

        if self.profile is not None and self.config.transliterate is not None:
            self.profile.check_column(self.config.transliterate)

        for ext in ("graphemes", "transliterated"):
            if not Doc.has_extension(ext):
                Doc.set_extension(ext, default=None)
            if not Token.has_extension(ext):
                Token.set_extension(ext, default=None)

    def __call__(self, doc: Doc) -> Doc:
        texts = [doc.text] + [token.text for token in doc]
        result = tokenize(texts, self.profile, self.rules, config=self.config)

        doc._.graphemes = result.strings[0].tokenized
        doc._.transliterated = result.strings[0].transliterated
        for token, string_result in zip(doc, result.strings[1:]):
            token._.graphemes = string_result.tokenized
            token._.transliterated = string_result.transliterated

        return doc

    def to_disk(self, path: str, *, exclude: tuple[str, ...] = ()) -> None:
        pass

    def from_disk(
        self, path: str, *, exclude: tuple[str, ...] = ()
    ) -> "OrthographyTokenizerComponent":
        return self

    def to_bytes(self, *, exclude: tuple[str, ...] = ()) -> bytes:
        return b""

    def from_bytes(
        self, data: bytes, *, exclude: tuple[str, ...] = ()
    ) -> "OrthographyTokenizerComponent":
        return self
