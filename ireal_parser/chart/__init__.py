"""Chord chart grammar: tokenizer, bar parser and renderer.

This subpackage turns descrambled chart text into tokens, folds the tokens
into bars of beat slots, and renders bars back into a fixed-width chart.
"""

from ireal_parser.chart.models import (
    Bar,
    BarAnnotation,
    BeatElement,
    Glyph,
    Music,
    NumberedEnding,
    SectionMarker,
    TimeSignature,
    Token,
)
from ireal_parser.chart.parser import decode_music, parse, parse_tokens
from ireal_parser.chart.renderer import render
from ireal_parser.chart.tokenizer import detokenize, tokenize

__all__ = [
    "Bar",
    "BarAnnotation",
    "BeatElement",
    "Glyph",
    "Music",
    "NumberedEnding",
    "SectionMarker",
    "TimeSignature",
    "Token",
    "decode_music",
    "detokenize",
    "parse",
    "parse_tokens",
    "render",
    "tokenize",
]
