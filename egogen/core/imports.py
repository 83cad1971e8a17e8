# egogen/core/imports.py
"""
Import-only parsing of Go header text.

Templates contribute header blocks holding top-level Go declarations, in
practice import statements. The package writer concatenates them behind a
synthetic package clause and hands the result to `parse_imports_only`, which
understands just enough Go to read:

    package <name>
    import "path"
    import alias "path"
    import ( ... )

Parsing stops quietly at the first token that does not start an import
declaration, the same way Go's own imports-only mode does.
"""
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple
import structlog

from egogen.exceptions import HeaderParseError

log = structlog.get_logger(__name__)

GO_KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
})

# token kinds
IDENT = "IDENT"
KEYWORD = "KEYWORD"
STRING = "STRING"
LPAREN = "("
RPAREN = ")"
SEMICOLON = ";"
PERIOD = "."
EOF = "EOF"
OTHER = "OTHER"

_ILLEGAL_IMPORT_CHARS = set("!\"#$%&'()*,:;<=>?[\\]^`{|}\ufffd")
_ESCAPE_RE = re.compile(r"\\(?:([abfnrtv\\'\"])|x([0-9A-Fa-f]{2})|u([0-9A-Fa-f]{4})|U([0-9A-Fa-f]{8})|([0-7]{3}))")
_SIMPLE_UNESCAPES = {
    "a": "\a", "b": "\b", "f": "\f", "n": "\n", "r": "\r",
    "t": "\t", "v": "\v", "\\": "\\", "'": "'", '"': '"',
}


@dataclass(frozen=True)
class Token:
    kind: str
    value: str
    line: int
    col: int

    def describe(self) -> str:
        # how Go's parser names a token in "expected X, found Y" messages.
        if self.kind == EOF:
            return "'EOF'"
        if self.kind == SEMICOLON and self.value == "\n":
            return "newline"
        if self.kind in (IDENT, STRING):
            return self.value
        return f"'{self.value}'"


@dataclass(frozen=True)
class ImportSpec:
    """One import specification: an optional local name and the path literal as written."""
    path: str
    name: Optional[str] = None
    line: int = 0

    @property
    def key(self) -> Tuple[str, str]:
        return (self.name or "", self.path)

    def render(self) -> str:
        if self.name is None:
            return self.path
        return f"{self.name} {self.path}"


@dataclass
class ImportsFile:
    package: str
    imports: List[ImportSpec] = field(default_factory=list)
    # first token after the import declarations, if parsing stopped early.
    stopped_at: Optional[Token] = None


class _Scanner:
    """Lazily tokenizes Go source, inserting semicolons at line ends like the Go scanner."""

    def __init__(self, src: str, filename: str):
        self.src = src
        self.filename = filename
        self.offset = 0
        self.line = 1
        self.col = 1
        self.insert_semi = False

    def error(self, line: int, col: int, msg: str) -> HeaderParseError:
        return HeaderParseError(f"{self.filename}:{line}:{col}: {msg}", self.src)

    def _peek(self, n: int = 0) -> str:
        i = self.offset + n
        return self.src[i] if i < len(self.src) else ""

    def _advance(self) -> str:
        ch = self.src[self.offset]
        self.offset += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _skip_general_comment(self, line: int, col: int) -> bool:
        # consumes a /* */ comment; reports whether it spanned a newline.
        self._advance()
        self._advance()
        saw_newline = False
        while True:
            if self._peek() == "":
                raise self.error(line, col, "comment not terminated")
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()
                self._advance()
                return saw_newline
            if self._advance() == "\n":
                saw_newline = True

    def next(self) -> Token:
        while True:
            ch = self._peek()
            line, col = self.line, self.col
            if ch == "":
                if self.insert_semi:
                    self.insert_semi = False
                    return Token(SEMICOLON, "\n", line, col)
                return Token(EOF, "", line, col)
            if ch == "\n":
                self._advance()
                if self.insert_semi:
                    self.insert_semi = False
                    return Token(SEMICOLON, "\n", line, col)
                continue
            if ch in " \t\r":
                self._advance()
                continue
            if ch == "/" and self._peek(1) == "/":
                while self._peek() not in ("", "\n"):
                    self._advance()
                continue
            if ch == "/" and self._peek(1) == "*":
                if self._skip_general_comment(line, col) and self.insert_semi:
                    self.insert_semi = False
                    return Token(SEMICOLON, "\n", line, col)
                continue
            break

        if ch.isalpha() or ch == "_":
            start = self.offset
            while self._peek() and (self._peek().isalnum() or self._peek() == "_"):
                self._advance()
            word = self.src[start:self.offset]
            if word in GO_KEYWORDS:
                self.insert_semi = word in ("break", "continue", "fallthrough", "return")
                return Token(KEYWORD, word, line, col)
            self.insert_semi = True
            return Token(IDENT, word, line, col)
        if ch == '"':
            return self._scan_interpreted(line, col)
        if ch == "`":
            return self._scan_raw(line, col)

        self._advance()
        self.insert_semi = ch == ")"
        if ch in (LPAREN, RPAREN, SEMICOLON, PERIOD):
            return Token(ch, ch, line, col)
        return Token(OTHER, ch, line, col)

    def _scan_interpreted(self, line: int, col: int) -> Token:
        start = self.offset
        self._advance()
        while True:
            ch = self._peek()
            if ch in ("", "\n"):
                raise self.error(line, col, "string literal not terminated")
            self._advance()
            if ch == "\\":
                if self._peek() in ("", "\n"):
                    raise self.error(line, col, "string literal not terminated")
                self._advance()
            elif ch == '"':
                break
        self.insert_semi = True
        return Token(STRING, self.src[start:self.offset], line, col)

    def _scan_raw(self, line: int, col: int) -> Token:
        start = self.offset
        self._advance()
        while True:
            ch = self._peek()
            if ch == "":
                raise self.error(line, col, "raw string literal not terminated")
            self._advance()
            if ch == "`":
                break
        self.insert_semi = True
        return Token(STRING, self.src[start:self.offset], line, col)


def unquote_go_string(literal: str) -> str:
    """Returns the value of a Go string literal; raises ValueError when malformed."""
    if len(literal) >= 2 and literal[0] == literal[-1] == "`":
        return literal[1:-1].replace("\r", "")
    if len(literal) < 2 or literal[0] != '"' or literal[-1] != '"':
        raise ValueError(f"not a string literal: {literal}")
    body = literal[1:-1]
    out: List[str] = []
    pos = 0
    while pos < len(body):
        ch = body[pos]
        if ch != "\\":
            out.append(ch)
            pos += 1
            continue
        m = _ESCAPE_RE.match(body, pos)
        if m is None:
            raise ValueError("unknown escape sequence")
        simple, hex2, hex4, hex8, octal = m.groups()
        if simple is not None:
            if simple == "'":
                raise ValueError("unknown escape sequence")
            out.append(_SIMPLE_UNESCAPES[simple])
        elif octal is not None:
            value = int(octal, 8)
            if value > 255:
                raise ValueError("octal escape value > 255")
            out.append(chr(value))
        else:
            value = int(hex2 or hex4 or hex8, 16)
            if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                raise ValueError("escape sequence is invalid Unicode code point")
            out.append(chr(value))
        pos = m.end()
    return "".join(out)


def is_valid_import_path(path: str) -> bool:
    if path == "":
        return False
    for ch in path:
        if not ch.isprintable() or ch.isspace() or ch in _ILLEGAL_IMPORT_CHARS:
            return False
    return True


class _ImportParser:

    def __init__(self, src: str, filename: str):
        self.scanner = _Scanner(src, filename)
        self.tok = self.scanner.next()

    def _next(self) -> None:
        self.tok = self.scanner.next()

    def _error(self, msg: str) -> HeaderParseError:
        return self.scanner.error(self.tok.line, self.tok.col, msg)

    def _expect(self, kind: str, what: str) -> Token:
        if self.tok.kind != kind:
            raise self._error(f"expected {what}, found {self.tok.describe()}")
        tok = self.tok
        self._next()
        return tok

    def _is_keyword(self, word: str) -> bool:
        return self.tok.kind == KEYWORD and self.tok.value == word

    def _expect_semi(self, after: str) -> None:
        # a closing paren or EOF also terminates a declaration.
        if self.tok.kind == SEMICOLON:
            self._next()
        elif self.tok.kind not in (RPAREN, EOF):
            raise self._error(f"expected ';', found {self.tok.describe()} after {after}")

    def parse_file(self) -> ImportsFile:
        if not self._is_keyword("package"):
            raise self._error(f"expected 'package', found {self.tok.describe()}")
        self._next()
        name = self._expect(IDENT, "'IDENT'")
        if name.value == "_":
            raise self.scanner.error(name.line, name.col, "invalid package name _")
        self._expect_semi("package clause")

        result = ImportsFile(package=name.value)
        while self._is_keyword("import"):
            self._next()
            if self.tok.kind == LPAREN:
                self._next()
                while self.tok.kind not in (RPAREN, EOF):
                    result.imports.append(self._parse_spec())
                    if self.tok.kind == RPAREN:
                        break
                    self._expect(SEMICOLON, "';'")
                self._expect(RPAREN, "')'")
            else:
                result.imports.append(self._parse_spec())
            self._expect_semi("import declaration")

        if self.tok.kind != EOF:
            result.stopped_at = self.tok
        return result

    def _parse_spec(self) -> ImportSpec:
        name: Optional[str] = None
        if self.tok.kind == IDENT:
            name = self.tok.value
            self._next()
        elif self.tok.kind == PERIOD:
            name = "."
            self._next()
        path_tok = self.tok
        if path_tok.kind != STRING:
            raise self._error(f"expected 'STRING', found {self.tok.describe()}")
        try:
            value = unquote_go_string(path_tok.value)
        except ValueError as e:
            raise self.scanner.error(path_tok.line, path_tok.col, str(e)) from e
        if not is_valid_import_path(value):
            raise self.scanner.error(path_tok.line, path_tok.col, f"invalid import path: {path_tok.value}")
        self._next()
        return ImportSpec(path=path_tok.value, name=name, line=path_tok.line)


def parse_imports_only(src: str, filename: str = "ego.go") -> ImportsFile:
    """Parses the package clause and leading import declarations of src.

    Raises HeaderParseError, carrying src, when the text is not valid.
    """
    parsed = _ImportParser(src, filename).parse_file()
    if parsed.stopped_at is not None:
        log.warning("header_parse_stopped_at_non_import",
                    line=parsed.stopped_at.line, token=parsed.stopped_at.value)
    return parsed


def dedupe_imports(specs: Iterable[ImportSpec]) -> List[ImportSpec]:
    """Drops repeated (alias, path) pairs; the first occurrence keeps its position.

    The same path under two different aliases is kept twice.
    """
    seen: Set[Tuple[str, str]] = set()
    unique: List[ImportSpec] = []
    for spec in specs:
        if spec.key in seen:
            log.debug("duplicate_import_skipped", name=spec.name, path=spec.path, line=spec.line)
            continue
        seen.add(spec.key)
        unique.append(spec)
    return unique
