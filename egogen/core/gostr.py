_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}

def _escape_rune(ch: str, ascii_only: bool) -> str:
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch]
    cp = ord(ch)
    if cp < 0x20 or cp == 0x7F:
        return "\\x%02x" % cp
    if 0xD800 <= cp <= 0xDFFF:
        # lone surrogates are not valid runes; Go substitutes the replacement char.
        return "\\ufffd" if ascii_only else "\ufffd"
    if cp < 0x80:
        return ch
    if not ascii_only and ch.isprintable():
        return ch
    if cp < 0x10000:
        return "\\u%04x" % cp
    return "\\U%08x" % cp

def go_quote(s: str) -> str:
    """Returns a double-quoted Go string literal for s, like strconv.Quote."""
    return '"' + "".join(_escape_rune(ch, False) for ch in s) + '"'

def go_quote_ascii(s: str) -> str:
    """Like go_quote but escapes every non-ASCII rune (strconv.QuoteToASCII)."""
    return '"' + "".join(_escape_rune(ch, True) for ch in s) + '"'
