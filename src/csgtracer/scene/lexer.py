# scene/lexer.py
"""
Tokenizer for the scene description language.

The input is read one character at a time with one character (and, one
level up, one token) of look-ahead; every token remembers where it started
so that errors can point at it.
"""
import copy
from dataclasses import dataclass
from enum import Enum
from typing import Optional, TextIO

from csgtracer.exceptions import GrammarError

WHITESPACE = " \t\n\r"
COMMENT = "#"
SYMBOLS = "()<>[],*"


@dataclass
class SourceLocation:
    """A position in a scene file; lines and columns start from 1."""
    file_name: str = ""
    line_num: int = 1
    col_num: int = 1

    def __str__(self) -> str:
        return f"{self.file_name}:{self.line_num}:{self.col_num}"


class KeywordEnum(Enum):
    MATERIAL = "material"
    PLANE = "plane"
    SPHERE = "sphere"
    CUBE = "cube"
    UNION = "union"
    DIFFERENCE = "difference"
    INTERSECTION = "intersection"
    FUSION = "fusion"
    DIFFUSE = "diffuse"
    SPECULAR = "specular"
    UNIFORM = "uniform"
    CHECKERED = "checkered"
    IMAGE = "image"
    IDENTITY = "identity"
    TRANSLATION = "translation"
    ROTATION_X = "rotation_x"
    ROTATION_Y = "rotation_y"
    ROTATION_Z = "rotation_z"
    SCALING = "scaling"
    CAMERA = "camera"
    ORTHOGONAL = "orthogonal"
    PERSPECTIVE = "perspective"
    FLOAT = "float"


KEYWORDS = {k.value: k for k in KeywordEnum}


class Token:
    """Base class of all tokens; ``location`` is where the token starts."""
    def __init__(self, location: SourceLocation):
        self.location = location


class KeywordToken(Token):
    def __init__(self, location: SourceLocation, keyword: KeywordEnum):
        super().__init__(location)
        self.keyword = keyword

    def __str__(self) -> str:
        return self.keyword.value


class IdentifierToken(Token):
    def __init__(self, location: SourceLocation, identifier: str):
        super().__init__(location)
        self.identifier = identifier

    def __str__(self) -> str:
        return self.identifier


class StringToken(Token):
    def __init__(self, location: SourceLocation, string: str):
        super().__init__(location)
        self.string = string

    def __str__(self) -> str:
        return f'"{self.string}"'


class LiteralNumberToken(Token):
    def __init__(self, location: SourceLocation, value: float):
        super().__init__(location)
        self.value = value

    def __str__(self) -> str:
        return str(self.value)


class SymbolToken(Token):
    def __init__(self, location: SourceLocation, symbol: str):
        super().__init__(location)
        self.symbol = symbol

    def __str__(self) -> str:
        return self.symbol


class StopToken(Token):
    """End of the input."""
    def __str__(self) -> str:
        return "end of file"


class InputStream:
    """
    Character stream with position tracking and push-back.
    """
    def __init__(self, stream: TextIO, file_name: str = "", tabulations: int = 4):
        self.stream = stream
        self.location = SourceLocation(file_name=file_name, line_num=1, col_num=1)
        self.saved_char = ""
        self.saved_location = self.location
        self.tabulations = tabulations
        self.saved_token: Optional[Token] = None

    def _update_pos(self, ch: str) -> None:
        if ch == "":
            return
        if ch == "\n":
            self.location.line_num += 1
            self.location.col_num = 1
        elif ch == "\t":
            self.location.col_num += self.tabulations
        else:
            self.location.col_num += 1

    def read_char(self) -> str:
        """Next character, or '' at the end of the stream."""
        if self.saved_char != "":
            ch = self.saved_char
            self.saved_char = ""
        else:
            ch = self.stream.read(1)

        self.saved_location = copy.copy(self.location)
        self._update_pos(ch)
        return ch

    def unread_char(self, ch: str) -> None:
        assert self.saved_char == "", "only one character can be pushed back"
        self.saved_char = ch
        self.location = self.saved_location

    def skip_whitespaces_and_comments(self) -> None:
        ch = self.read_char()
        while ch in WHITESPACE or ch == COMMENT:
            if ch == "":
                return
            if ch == COMMENT:
                # Skip the rest of the line
                while self.read_char() not in ("\r", "\n", ""):
                    pass
            ch = self.read_char()
        self.unread_char(ch)

    def _parse_string_token(self, token_location: SourceLocation) -> StringToken:
        chars = []
        while True:
            ch = self.read_char()
            if ch == '"':
                break
            if ch == "":
                raise GrammarError(token_location, "unterminated string")
            chars.append(ch)
        return StringToken(token_location, "".join(chars))

    def _parse_float_token(self, first_char: str, token_location: SourceLocation) -> LiteralNumberToken:
        chars = [first_char]
        while True:
            ch = self.read_char()
            if not (ch.isdigit() or ch in ".eE" or (ch in "+-" and chars[-1] in "eE")):
                self.unread_char(ch)
                break
            chars.append(ch)
        token = "".join(chars)
        try:
            value = float(token)
        except ValueError:
            raise GrammarError(token_location, f"'{token}' is an invalid floating-point number") from None
        return LiteralNumberToken(token_location, value)

    def _parse_keyword_or_identifier_token(self, first_char: str,
                                           token_location: SourceLocation) -> Token:
        chars = [first_char]
        while True:
            ch = self.read_char()
            if not (ch.isalnum() or ch == "_"):
                self.unread_char(ch)
                break
            chars.append(ch)
        token = "".join(chars)
        if token in KEYWORDS:
            return KeywordToken(token_location, KEYWORDS[token])
        return IdentifierToken(token_location, token)

    def read_token(self) -> Token:
        if self.saved_token is not None:
            result = self.saved_token
            self.saved_token = None
            return result

        self.skip_whitespaces_and_comments()

        ch = self.read_char()
        if ch == "":
            return StopToken(copy.copy(self.location))

        token_location = copy.copy(self.saved_location)

        if ch in SYMBOLS:
            return SymbolToken(token_location, ch)
        if ch == '"':
            return self._parse_string_token(token_location)
        if ch.isdigit() or ch in "+-.":
            return self._parse_float_token(ch, token_location)
        if ch.isalpha() or ch == "_":
            return self._parse_keyword_or_identifier_token(ch, token_location)
        raise GrammarError(token_location, f"invalid character '{ch}'")

    def unread_token(self, token: Token) -> None:
        """Push back ``token`` so that the next ``read_token`` returns it."""
        assert self.saved_token is None, "only one token can be pushed back"
        self.saved_token = token
