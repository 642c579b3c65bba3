"""
Reader for the data literal declared by the vendor's inline script.

The vendor publishes runtime metadata as a single JavaScript statement of the
form ``var <name> = [...];``. Rather than executing the script, this module
parses the declared value with a small recursive-descent parser that only
understands literal syntax: arrays, objects, strings, numbers, booleans and
null. Anything else is rejected.
"""

import re
from typing import Any, Dict, List

_WHITESPACE = re.compile(r"(?:\s+|//[^\n]*|/\*.*?\*/)+", re.DOTALL)
_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_NUMBER = re.compile(r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?")
_DECLARATION = re.compile(r"(?:var|let|const)\s+([A-Za-z_$][A-Za-z0-9_$]*)\s*=")

_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_KEYWORDS = {"true": True, "false": False, "null": None}

# The vendor data nests three levels deep
MAX_DEPTH = 32


class ScriptLiteralError(ValueError):
    """Raised when the script deviates from the supported literal grammar."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} at offset {position}")
        self.position = position


class _LiteralParser:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.depth = 0

    def skip_whitespace(self) -> None:
        match = _WHITESPACE.match(self.source, self.pos)
        if match:
            self.pos = match.end()

    def peek(self) -> str:
        self.skip_whitespace()
        return self.source[self.pos : self.pos + 1]

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise ScriptLiteralError(f"Expected '{char}'", self.pos)
        self.pos += 1

    def at_end(self) -> bool:
        return self.peek() == ""

    def parse_value(self) -> Any:
        char = self.peek()
        if char in ("[", "{"):
            if self.depth >= MAX_DEPTH:
                raise ScriptLiteralError("Literal nested too deeply", self.pos)
            self.depth += 1
            try:
                return self.parse_array() if char == "[" else self.parse_object()
            finally:
                self.depth -= 1
        if char in ("'", '"'):
            return self.parse_string()
        if char == "-" or char.isdigit():
            return self.parse_number()

        match = _IDENTIFIER.match(self.source, self.pos)
        if match and match.group() in _KEYWORDS:
            self.pos = match.end()
            return _KEYWORDS[match.group()]
        raise ScriptLiteralError("Unsupported expression", self.pos)

    def parse_array(self) -> List[Any]:
        self.expect("[")
        items = []
        while self.peek() != "]":
            items.append(self.parse_value())
            if self.peek() != ",":
                break
            self.pos += 1
        self.expect("]")
        return items

    def parse_object(self) -> Dict[str, Any]:
        self.expect("{")
        members = {}
        while self.peek() != "}":
            key = self.parse_key()
            self.expect(":")
            members[key] = self.parse_value()
            if self.peek() != ",":
                break
            self.pos += 1
        self.expect("}")
        return members

    def parse_key(self) -> str:
        char = self.peek()
        if char in ("'", '"'):
            return self.parse_string()
        match = _IDENTIFIER.match(self.source, self.pos)
        if not match:
            raise ScriptLiteralError("Expected property name", self.pos)
        self.pos = match.end()
        return match.group()

    def parse_number(self) -> Any:
        match = _NUMBER.match(self.source, self.pos)
        if not match:
            raise ScriptLiteralError("Malformed number", self.pos)
        self.pos = match.end()
        text = match.group()
        if any(c in text for c in ".eE"):
            return float(text)
        return int(text)

    def parse_string(self) -> str:
        quote = self.source[self.pos]
        start = self.pos
        self.pos += 1
        chunks = []
        while True:
            if self.pos >= len(self.source):
                raise ScriptLiteralError("Unterminated string", start)
            char = self.source[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chunks)
            if char == "\n":
                raise ScriptLiteralError("Line break in string", self.pos)
            if char == "\\":
                chunks.append(self.parse_escape())
                continue
            chunks.append(char)
            self.pos += 1

    def parse_escape(self) -> str:
        # self.pos points at the backslash
        char = self.source[self.pos + 1 : self.pos + 2]
        if char == "":
            raise ScriptLiteralError("Unterminated escape", self.pos)
        if char == "u":
            digits = self.source[self.pos + 2 : self.pos + 6]
            if not re.fullmatch(r"[0-9A-Fa-f]{4}", digits):
                raise ScriptLiteralError("Malformed unicode escape", self.pos)
            self.pos += 6
            return chr(int(digits, 16))
        if char == "x":
            digits = self.source[self.pos + 2 : self.pos + 4]
            if not re.fullmatch(r"[0-9A-Fa-f]{2}", digits):
                raise ScriptLiteralError("Malformed hex escape", self.pos)
            self.pos += 4
            return chr(int(digits, 16))
        self.pos += 2
        if char == "\n":
            return ""
        return _ESCAPES.get(char, char)


def parse_literal(source: str) -> Any:
    """
    Parse a standalone JavaScript literal.

    Args:
        source: Text holding exactly one literal value

    Returns:
        The equivalent Python value (list, dict, str, int, float, bool or None)

    Raises:
        ScriptLiteralError: If the text is not a single supported literal
    """
    parser = _LiteralParser(source)
    value = parser.parse_value()
    if not parser.at_end():
        raise ScriptLiteralError("Unexpected trailing content", parser.pos)
    return value


def parse_variable_declaration(source: str, name: str) -> Any:
    """
    Read back the value of ``var <name> = <literal>;`` without executing it.

    Args:
        source: The script text
        name: The variable the script is expected to declare

    Returns:
        The declared value as Python data

    Raises:
        ScriptLiteralError: If the script declares anything else, or the value
            is not a supported literal
    """
    parser = _LiteralParser(source)
    parser.skip_whitespace()
    match = _DECLARATION.match(source, parser.pos)
    if not match:
        raise ScriptLiteralError("Expected variable declaration", parser.pos)
    if match.group(1) != name:
        raise ScriptLiteralError(
            f"Expected declaration of '{name}', found '{match.group(1)}'", parser.pos
        )
    parser.pos = match.end()

    value = parser.parse_value()
    if parser.peek() == ";":
        parser.pos += 1
    if not parser.at_end():
        raise ScriptLiteralError("Unexpected trailing content", parser.pos)
    return value

