"""
Design token types

Tokens follow the design-tokens community group layout when serialised:
``{"$type": "dimension", "$value": "1rem"}``. Icon tokens carry no type.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

from figma2theme.core.exception.exceptions import (
    InvalidTokenPathError,
    InvalidTokenValueError,
)

logger = logging.getLogger(__name__)

DIMENSION_PATTERN = re.compile(r"^-?\d+(\.\d+)?(px|rem|em|%)$")
HEX_COLOUR_PATTERN = re.compile(r"^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$")


class TokenType(str, Enum):
    DIMENSION = "dimension"
    COLOR = "color"
    NUMBER = "number"
    STRING = "string"
    FONT_FAMILY = "fontFamily"
    SHADOW = "shadow"
    TYPOGRAPHY = "typography"


@dataclass(frozen=True)
class ShadowValue:
    inset: bool
    color: str
    offset_x: str
    offset_y: str
    blur: str
    spread: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inset": self.inset,
            "color": self.color,
            "offsetX": self.offset_x,
            "offsetY": self.offset_y,
            "blur": self.blur,
            "spread": self.spread,
        }

    def to_css(self) -> str:
        inset = "inset " if self.inset else ""
        return f"{inset}{self.offset_x} {self.offset_y} {self.blur} {self.spread} {self.color}"


@dataclass(frozen=True)
class SvgInfo:
    width: str
    height: str


@dataclass(frozen=True)
class OptimizedSvg:
    data: str
    info: SvgInfo

    def to_dict(self) -> Dict[str, Any]:
        return {"data": self.data, "info": {"width": self.info.width, "height": self.info.height}}


Scalar = Union[str, int, float]
ResponsiveValue = Union[Scalar, Dict[str, Scalar]]


def _is_dimension(value: Any) -> bool:
    return isinstance(value, str) and (value == "0" or bool(DIMENSION_PATTERN.match(value)))


def _check_scalar(token_type: TokenType, value: Any) -> bool:
    if token_type == TokenType.DIMENSION:
        return _is_dimension(value)
    if token_type == TokenType.COLOR:
        return isinstance(value, str) and bool(HEX_COLOUR_PATTERN.match(value))
    if token_type == TokenType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if token_type in (TokenType.STRING, TokenType.FONT_FAMILY):
        return isinstance(value, str)
    return False


def _check_value(token_type: Optional[TokenType], value: Any) -> bool:
    if token_type is None:
        return isinstance(value, OptimizedSvg)
    if token_type == TokenType.SHADOW:
        return isinstance(value, (list, tuple)) and all(
            isinstance(v, ShadowValue) for v in value
        )
    if token_type == TokenType.TYPOGRAPHY:
        return isinstance(value, Mapping) and all(
            isinstance(v, str)
            or (isinstance(v, Mapping) and all(isinstance(bp, str) for bp in v.values()))
            for v in value.values()
        )
    if isinstance(value, Mapping):
        # responsive value keyed by breakpoint
        return bool(value) and all(_check_scalar(token_type, v) for v in value.values())
    return _check_scalar(token_type, value)


def _serialise(value: Any) -> Any:
    if isinstance(value, (ShadowValue, OptimizedSvg)):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_serialise(v) for v in value]
    if isinstance(value, Mapping):
        return {k: _serialise(v) for k, v in value.items()}
    return value


@dataclass(frozen=True)
class Token:
    type: Optional[TokenType]
    value: Any

    def __post_init__(self) -> None:
        if isinstance(self.value, list):
            object.__setattr__(self, "value", tuple(self.value))
        if not _check_value(self.type, self.value):
            type_name = self.type.value if self.type else "icon"
            raise InvalidTokenValueError(
                f"Value {self.value!r} does not match token type {type_name!r}"
            )

    def to_dict(self) -> Dict[str, Any]:
        if self.type is None:
            return {"$value": _serialise(self.value)}
        return {"$type": self.type.value, "$value": _serialise(self.value)}

    def to_value(self) -> Any:
        return _serialise(self.value)


def dimension(value: ResponsiveValue) -> Token:
    return Token(TokenType.DIMENSION, value)


def colour(value: str) -> Token:
    return Token(TokenType.COLOR, value)


@dataclass
class GridStyleTokens:
    """Column grid of one grid style, each property possibly responsive"""

    columns: Token
    gutter: Token
    margin: Token

    def to_dict(self) -> Dict[str, Any]:
        return {
            "columns": self.columns.to_dict(),
            "gutter": self.gutter.to_dict(),
            "margin": self.margin.to_dict(),
        }

    def to_value(self) -> Dict[str, Any]:
        return {
            "columns": self.columns.to_value(),
            "gutter": self.gutter.to_value(),
            "margin": self.margin.to_value(),
        }


TokenMap = Dict[str, Token]
Leaf = Union[Token, GridStyleTokens]
TreeNode = Union[Leaf, "TokenTree"]


def validate_path(path: Sequence[str]) -> Tuple[str, ...]:
    """Strip each path segment and make sure it can be used as a nested key"""
    if not path:
        raise InvalidTokenPathError("Token name is empty")
    segments = []
    for segment in path:
        segment = segment.strip()
        if not segment:
            raise InvalidTokenPathError(f"Token name {'/'.join(path)!r} has an empty segment")
        if "." in segment:
            raise InvalidTokenPathError(
                f"Token name {'/'.join(path)!r} contains a '.' in segment {segment!r}"
            )
        segments.append(segment)
    return tuple(segments)


class TokenTree:
    """A nested mapping of tokens built from `/`-delimited names"""

    def __init__(self) -> None:
        self._children: Dict[str, TreeNode] = {}

    def insert(self, path: Sequence[str], token: Leaf) -> None:
        segments = validate_path(path)
        self._insert(segments, token, segments)

    def _insert(self, segments: Tuple[str, ...], token: Leaf, full: Tuple[str, ...]) -> None:
        head, rest = segments[0], segments[1:]
        existing = self._children.get(head)
        if not rest:
            if existing is not None:
                logger.warning(
                    f"Duplicate token name '{'/'.join(full)}', the last one found will be used"
                )
            self._children[head] = token
            return
        if not isinstance(existing, TokenTree):
            if existing is not None:
                logger.warning(
                    f"Token '{'/'.join(full[: len(full) - len(rest)])}' is replaced by a group "
                    f"to make room for '{'/'.join(full)}'"
                )
            existing = TokenTree()
            self._children[head] = existing
        existing._insert(rest, token, full)

    def get(self, path: Sequence[str]) -> Optional[TreeNode]:
        node: Optional[TreeNode] = self
        for segment in path:
            if not isinstance(node, TokenTree):
                return None
            node = node._children.get(segment)
        return node

    def items(self) -> Iterator[Tuple[str, TreeNode]]:
        return iter(self._children.items())

    def leaves(self, prefix: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], Leaf]]:
        """Yield every token with its full path, depth first"""
        for key, child in self._children.items():
            if isinstance(child, TokenTree):
                yield from child.leaves(prefix + (key,))
            else:
                yield prefix + (key,), child

    def __len__(self) -> int:
        return len(self._children)

    def __bool__(self) -> bool:
        return bool(self._children)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v.to_dict() for k, v in self._children.items()}

    def to_values(self) -> Dict[str, Any]:
        return {
            k: v.to_values() if isinstance(v, TokenTree) else v.to_value()
            for k, v in self._children.items()
        }


@dataclass
class TypographyTokens:
    fonts: TokenMap = field(default_factory=dict)
    font_sizes: TokenMap = field(default_factory=dict)
    line_heights: TokenMap = field(default_factory=dict)
    letter_spacing: TokenMap = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fonts": _map_to_dict(self.fonts),
            "fontSizes": _map_to_dict(self.font_sizes),
            "lineHeights": _map_to_dict(self.line_heights),
            "letterSpacing": _map_to_dict(self.letter_spacing),
        }

    def to_values(self) -> Dict[str, Any]:
        return {
            "fonts": _map_to_values(self.fonts),
            "fontSizes": _map_to_values(self.font_sizes),
            "lineHeights": _map_to_values(self.line_heights),
            "letterSpacing": _map_to_values(self.letter_spacing),
        }


def _map_to_dict(tokens: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v.to_dict() for k, v in tokens.items()}


def _map_to_values(tokens: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        k: v.to_values() if isinstance(v, TokenTree) else v.to_value()
        for k, v in tokens.items()
    }


@dataclass
class TokenDictionary:
    """All the design tokens extracted from a Figma file"""

    breakpoints: TokenMap = field(default_factory=dict)
    colours: TokenTree = field(default_factory=TokenTree)
    grid_styles: TokenTree = field(default_factory=TokenTree)
    icons: TokenMap = field(default_factory=dict)
    radii: TokenMap = field(default_factory=dict)
    shadows: TokenMap = field(default_factory=dict)
    sizes: TokenMap = field(default_factory=dict)
    spacing: TokenMap = field(default_factory=dict)
    typography: TypographyTokens = field(default_factory=TypographyTokens)
    text_styles: TokenTree = field(default_factory=TokenTree)

    def to_dict(self) -> Dict[str, Any]:
        """Serialise to the `{"$type", "$value"}` JSON layout"""
        return {
            "breakpoints": _map_to_dict(self.breakpoints),
            "colours": self.colours.to_dict(),
            "gridStyles": self.grid_styles.to_dict(),
            "icons": _map_to_dict(self.icons),
            "radii": _map_to_dict(self.radii),
            "shadows": _map_to_dict(self.shadows),
            "sizes": _map_to_dict(self.sizes),
            "spacing": _map_to_dict(self.spacing),
            "typography": self.typography.to_dict(),
            "textStyles": self.text_styles.to_dict(),
        }

    def to_values(self) -> Dict[str, Any]:
        """Strip the token wrappers, leaving plain values"""
        return {
            "breakpoints": _map_to_values(self.breakpoints),
            "colours": self.colours.to_values(),
            "gridStyles": self.grid_styles.to_values(),
            "icons": _map_to_values(self.icons),
            "radii": _map_to_values(self.radii),
            "shadows": _map_to_values(self.shadows),
            "sizes": _map_to_values(self.sizes),
            "spacing": _map_to_values(self.spacing),
            "typography": self.typography.to_values(),
            "textStyles": self.text_styles.to_values(),
        }
