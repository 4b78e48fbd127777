"""
Character registry for notable Unicode code points.

This module holds the fixed table of characters the analyzer treats as
"notable": control characters, exotic spaces, joiners, separators and the
bidirectional formatting family. Each entry carries the metadata shown to
localization reviewers (short name, ``U+XXXX`` code, display glyph, long
name, an example block and a usage note).

Usage:
    from hidchar.chars.registry import lookup, entry_for

    entry = lookup("\\u200b")        # CharacterEntry or None
    entry = entry_for("\\u2000")     # always an entry (fallback if unknown)
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping


FALLBACK_DESCRIPTION = "Special Character"

# Highlight colours, assigned by registry order modulo the palette length
HIGHLIGHT_COLORS: tuple[str, ...] = (
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7", "#DDA0DD", "#98D8C8",
    "#F7DC6F", "#BB8FCE", "#85C1E9", "#F8C471", "#82E0AA", "#F1948A", "#85C1E9",
    "#D7BDE2", "#AED6F1", "#A3E4D7", "#F9E79F", "#D2B4DE", "#FF8C94", "#A8E6CF",
    "#FFD3B6", "#FFAAA5", "#FF8B94", "#C7CEEA", "#B5EAD7", "#E2F0CB", "#FFDAC1",
    "#D4A5A5", "#9CADCE", "#E8DFF5",
)


@dataclass(frozen=True)
class CharacterEntry:
    """Metadata describing one notable character.

    Attributes:
        char: The character itself (a single code point).
        name: Short human name (e.g., "Zero-width Space").
        code: Formal designation, ``U+`` plus at least four uppercase hex digits.
        glyph: Printable substitute used when rendering the character.
        long_name: Long display name.
        example: Multi-line example text demonstrating the character.
        usage: Where the character matters and what breaks without it.
    """

    char: str
    name: str
    code: str
    glyph: str
    long_name: str
    example: str
    usage: str

    @property
    def code_point(self) -> int:
        """Return the integer code point of the character."""
        return ord(self.char)

    @property
    def key(self) -> str:
        """Return the lowercase hex key used to address rendered markers."""
        return char_key(self.char)


def format_code_point(char: str) -> str:
    """Return the ``U+XXXX`` designation for a single character.

    Args:
        char: A one-code-point string.

    Returns:
        ``U+`` followed by the uppercase hex code point, zero-padded to 4 digits.

    Raises:
        ValueError: If ``char`` is not exactly one code point.

    Examples:
        >>> format_code_point("\\t")
        'U+0009'
        >>> format_code_point("\\U0001F600")
        'U+1F600'
    """
    if len(char) != 1:
        raise ValueError(f"Expected a single code point, got {len(char)}: {char!r}")
    return f"U+{ord(char):04X}"


def char_key(char: str) -> str:
    """Return the lowercase hex code point of ``char`` (e.g., ``"200b"``)."""
    return format(ord(char), "x")


def parse_code_point(value: str) -> str:
    """Parse a user-supplied character reference into the character.

    Accepts ``U+200B``, ``u+200b``, ``0x200B``, a bare hex string such as
    ``200b``, or a single literal character.

    Raises:
        ValueError: If the value cannot be interpreted as one code point.
    """
    text = value.strip() if len(value) > 1 else value
    if len(text) == 1:
        return text
    lowered = text.lower()
    for prefix in ("u+", "0x", "\\u"):
        if lowered.startswith(prefix):
            lowered = lowered[len(prefix):]
            break
    try:
        code_point = int(lowered, 16)
    except ValueError:
        raise ValueError(f"Not a code point reference: {value!r}") from None
    if not 0 <= code_point <= 0x10FFFF:
        raise ValueError(f"Code point out of range: {value!r}")
    return chr(code_point)


def _entry(
    char: str,
    name: str,
    glyph: str,
    long_name: str,
    example: str,
    usage: str,
) -> CharacterEntry:
    return CharacterEntry(
        char=char,
        name=name,
        code=format_code_point(char),
        glyph=glyph,
        long_name=long_name,
        example=example,
        usage=usage,
    )


_ENTRIES: tuple[CharacterEntry, ...] = (
    _entry(
        "\t",
        "Tab",
        "→",
        "Tab",
        "Product Name\tPrice\tQuantity\nLaptop Computer\t$899.99\t5\nWireless Mouse\t$24.99\t50",
        "Creates horizontal spacing, typically 4-8 spaces wide. Common in TSV files and code indentation.",
    ),
    _entry(
        "\n",
        "Line Feed",
        "↵",
        "Line Feed (new line)",
        "123 Main Street\nApartment 4B\nSpringfield, IL 62701\nUnited States of America",
        "Standard line break on Unix/Linux/Mac systems. In localization, watch for platform-specific line endings.",
    ),
    _entry(
        "\r",
        "Carriage Return",
        "⏎",
        "Carriage Return",
        "Windows line ending example:\r\nFirst line of text\r\nSecond line of text\r\nThird line of text",
        "Part of Windows line ending (\\r\\n). Rarely used alone in modern text. May cause issues in cross-platform files.",
    ),
    _entry(
        "\u00A0",
        "Non-breaking Space",
        "NBSP",
        "Non-breaking Space",
        "Speed: 100\u00A0km/h\nPrice: $\u00A01,299.99\nMr.\u00A0John\u00A0Smith\nMarch\u00A025,\u00A02024",
        "Prevents line breaks between words/numbers. Critical for: units (100 km/h), currency ($ 1,299.99), titles (Mr. Smith), dates (March 25, 2024).",
    ),
    _entry(
        "\u200B",
        "Zero-width Space",
        "ZWSP",
        "Zero-width Space",
        "https://www.\u200Bvery\u200Blong\u200Bexample\u200Bwebsite\u200Burl\u200Baddress.\u200Bcom/path/to/resource\nsuper\u200Bcali\u200Bfragil\u200Bistic\u200Bexpi\u200Bali\u200Bdocious",
        "Allows line breaking in long URLs, compound words, or CJK text without visible space. Invisible but affects layout.",
    ),
    _entry(
        "\u00AD",
        "Soft Hyphen",
        "SHY",
        "Soft Hyphen",
        "This is a very long German word: Donau\u00ADdampf\u00ADschiff\u00ADfahrts\u00ADgesell\u00ADschafts\u00ADkapitän\nAnd another: Rechts\u00ADschutz\u00ADversiche\u00ADrungs\u00ADgesell\u00ADschaften",
        "Shows hyphen only when word breaks across lines. Essential for long words in German, Dutch, Finnish localization.",
    ),
    _entry(
        "\u2028",
        "Line Separator",
        "LS",
        "Line Separator",
        "This is the first semantic line of a paragraph that continues.\u2028This is the second semantic line within the same paragraph.\u2028And here is a third semantic line.\n"
        "JSON payload: {\"note\": \"Ship today\u2028Call before noon\"}",
        "Unicode-specific line break within paragraphs. May appear in JSON strings or international text processing. Older JavaScript parsers reject it inside string literals, and editors that ignore it merge the lines.",
    ),
    _entry(
        "\u2029",
        "Paragraph Separator",
        "PS",
        "Paragraph Separator",
        "This is the complete first paragraph with several words to make it substantial.\u2029This is the second paragraph that follows after the Unicode paragraph separator.\u2029And here begins the third distinct paragraph.\n"
        "Exported subtitle: Welcome back!\u2029Chapter two begins now.",
        "Unicode paragraph boundary marker. Semantic separator for structured text, distinct from simple line breaks. Tools that only split on line feeds show the paragraphs run together.",
    ),
    _entry(
        "\u200C",
        "Zero-width Non-joiner",
        "ZWNJ",
        "Zero-width Non-joiner",
        "Persian example: من می\u200Cخواهم (I want) vs میخواهم (wrong)\nHindi example: क्\u200Cय vs क्य (ligature difference)\nFarsi word: نمی\u200Cدانم (I don't know)",
        "Critical for Persian, Arabic, Devanagari scripts. Prevents unwanted letter joining while maintaining proper spacing.",
    ),
    _entry(
        "\u200D",
        "Zero-width Joiner",
        "ZWJ",
        "Zero-width Joiner",
        "Family emoji: 👨\u200D👩\u200D👧\u200D👦 (man+woman+girl+boy)\nProfession: 👨\u200D⚕️ (doctor) vs 👨 ⚕️ (separate)\nArabic: ل\u200Dا creates ligature",
        "Forms complex emoji sequences and ligatures. Essential for emoji families, skin tones, and connecting Arabic characters.",
    ),
    _entry(
        "\u200E",
        "Left-to-right Mark",
        "LRM",
        "Left-to-right Mark",
        "Arabic with number: مرحبا\u200E 123 (correct) vs مرحبا 123 (may reverse)\nEmail in RTL: البريد: user@\u200Eexample.com\nMixed: שלום\u200E, how are you?",
        "Forces LTR direction for numbers, emails, URLs in RTL text (Arabic, Hebrew). Prevents display corruption.",
    ),
    _entry(
        "\u200F",
        "Right-to-left Mark",
        "RLM",
        "Right-to-left Mark",
        "Price in Hebrew: המחיר:\u200F $99.99 (keeps $ on right)\nEnglish with RTL punctuation: Hello\u200F, שלום\nDate: התאריך:\u200F 23/11/2024",
        "Forces RTL direction for punctuation and numbers in bidirectional text. Critical for Hebrew/Arabic localization.",
    ),
    _entry(
        "\u202A",
        "Left-to-right Embedding",
        "LRE",
        "Left-to-right Embedding",
        "Arabic text with URL: زيارة \u202Ahttps://example.com/page\u202C للمزيد\nRTL with LTR: العنوان \u202A123 Main Street\u202C في المدينة",
        "Embeds LTR text section within RTL content. Must be closed with PDF (U+202C). Use for URLs in Arabic text.",
    ),
    _entry(
        "\u202B",
        "Right-to-left Embedding",
        "RLE",
        "Right-to-left Embedding",
        'English with Hebrew quote: He said \u202Bשלום עולם\u202C which means "hello world"\nLTR with RTL: The word is \u202Bمرحبا\u202C in Arabic',
        "Embeds RTL text section within LTR content. Requires PDF (U+202C) to close. Use for Hebrew/Arabic quotes.",
    ),
    _entry(
        "\u202C",
        "Pop Directional Formatting",
        "PDF",
        "Pop Directional Formatting",
        "Normal text \u202AMixed direction content here\u202C back to normal\nNested: Start \u202BLTR \u202ARTL inside\u202C end LTR\u202C back to start",
        "Closes LRE, RLE, LRO, or RLO. Essential pair with bidirectional formatting. Missing PDF causes layout issues.",
    ),
    _entry(
        "\u202D",
        "Left-to-right Override",
        "LRO",
        "Left-to-right Override",
        "Force Hebrew LTR: \u202D!שלום עולם\u202C shows as !םלוע םולש (reversed)\nOverride Arabic: \u202Dمرحبا 123\u202C all displays left-to-right",
        "Forces all text LTR regardless of character properties. Stronger than LRM. Use with caution, always close with PDF.",
    ),
    _entry(
        "\u202E",
        "Right-to-left Override",
        "RLO",
        "Right-to-left Override",
        "Reverse English: \u202EHello World!\u202C displays as !dlroW olleH\nReverse URL: \u202Eexample.com\u202C shows as moc.elpmaxe (security risk!)",
        "Forces all text RTL regardless of properties. Can reverse entire strings. Security risk if misused (spoofing).",
    ),
    _entry(
        "\uFEFF",
        "Zero-width No-break Space",
        "BOM",
        "Zero-width No-break Space (BOM)",
        '\uFEFF<?xml version="1.0" encoding="UTF-8"?>\n\uFEFF{"name": "config", "type": "UTF-8"}\nFile starts with BOM: \uFEFFThis is the first line',
        "Byte Order Mark at file start signals UTF encoding. Also prevents word breaks. May cause parsing errors if unexpected.",
    ),
    _entry(
        "\u2060",
        "Word Joiner",
        "WJ",
        "Word Joiner",
        "Keep\u2060together without visible space\nVersion\u20601.0.2\nISBN\u2060978-3-16-148410-0",
        "Zero-width non-breaking character. Prevents line breaks without adding visible space. Useful in technical docs and version numbers.",
    ),
    _entry(
        "\u2007",
        "Figure Space",
        "FIGSP",
        "Figure Space",
        "Align numbers:\n\u2007\u2007123.45\n\u20071,234.56\n123,456.78",
        "Same width as digits (0-9). Used to align numbers in tables and financial data. Essential for tabular localization.",
    ),
    _entry(
        "\u2009",
        "Thin Space",
        "THNSP",
        "Thin Space",
        "French punctuation\u2009: «\u2009Bonjour\u2009»\nQuestion\u2009?\nExclamation\u2009!",
        "Narrower than normal space. Standard in French typography before punctuation (? ! ; :) and inside guillemets.",
    ),
    _entry(
        "\u202F",
        "Narrow No-break Space",
        "NNBSP",
        "Narrow No-break Space",
        "French: 123\u202F456\u202F789\nPercentage: 99\u202F%\nTime: 14\u202Fh\u202F30\nPrice: 1\u202F234,56\u202F€",
        "Required in French localization for: thousand separators (123 456), percentages (99 %), units (14 h), currency.",
    ),
    _entry(
        "\u180E",
        "Mongolian Vowel Separator",
        "MVS",
        "Mongolian Vowel Separator",
        "Mongolian word with final vowel: ᠲᠡᠷᠡ\u180Eᠠ (tere-a)\n"
        "Without separator: ᠲᠡᠷᠡᠠ (letters join with the wrong final form)\n"
        "Mongolian text with vowel separator\u180E(invisible formatting)",
        "Mongolian script-specific character. Indicates vowel separation. Rarely needed but critical for Mongolian localization: without it the final A/E takes the wrong letter shape.",
    ),
    _entry(
        "\u2002",
        "En Space",
        "ENSP",
        "En Space",
        "Typography:\u2002En-width spacing\nDates:\u2002Jan\u20021–15,\u20022024",
        'Width of lowercase "n". Used in professional typography and publishing. Common in date ranges and lists.',
    ),
    _entry(
        "\u2003",
        "Em Space",
        "EMSP",
        "Em Space",
        "Typography:\u2003Em-width spacing (wider)\nParagraph:\u2003Indented first line",
        'Width of uppercase "M". Widest standard space. Used for paragraph indentation and professional typesetting.',
    ),
    _entry(
        "\u2004",
        "Three-Per-Em Space",
        "3/M",
        "Three-Per-Em Space",
        "Fine\u2004spacing\u2004control\nList:\u2004Item\u20041,\u2004Item\u20042",
        "One-third of an em width. Precise spacing control in professional typography and desktop publishing.",
    ),
    _entry(
        "\u2005",
        "Four-Per-Em Space",
        "4/M",
        "Four-Per-Em Space",
        "Tighter\u2005spacing\u2005control\nNumbers:\u20051,234\u2005567",
        "One-quarter of an em width. Fine-grained spacing for professional layouts and justified text.",
    ),
    _entry(
        "\u2006",
        "Six-Per-Em Space",
        "6/M",
        "Six-Per-Em Space",
        "Very\u2006fine\u2006spacing\nAbbrev.:\u2006Dr.\u2006Smith",
        "One-sixth of an em width. Finest spacing control in professional typography. Used in abbreviations and initials.",
    ),
    _entry(
        "\u2066",
        "Left-to-right Isolate",
        "LRI",
        "Left-to-right Isolate",
        "Modern RTL: Arabic text \u2066LTR content here\u2069 continues\nURL in RTL: Visit \u2066example.com\u2069 now",
        "Modern replacement for LRE (U+202A). Better isolation of LTR text in RTL context. Requires PDI (U+2069) to close.",
    ),
    _entry(
        "\u2067",
        "Right-to-left Isolate",
        "RLI",
        "Right-to-left Isolate",
        "Modern LTR: English text \u2067مرحبا بك\u2069 continues\nQuote: He said \u2067שלום\u2069 to everyone",
        "Modern replacement for RLE (U+202B). Better isolation of RTL text in LTR context. Requires PDI (U+2069) to close.",
    ),
    _entry(
        "\u2068",
        "First Strong Isolate",
        "FSI",
        "First Strong Isolate",
        "Auto-detect: \u2068Could be LTR or RTL\u2069 text\nSmart: \u2068مرحبا\u2069 or \u2068Hello\u2069",
        "Automatically detects text direction from first strong directional character. Most flexible modern bidirectional control.",
    ),
    _entry(
        "\u2069",
        "Pop Directional Isolate",
        "PDI",
        "Pop Directional Isolate",
        "Close isolate: \u2066LTR text\u2069 back to normal\nNested: \u2067RTL \u2066inner LTR\u2069 back to RTL\u2069 normal",
        "Closes LRI, RLI, or FSI. Modern replacement for PDF (U+202C). Essential pair with Unicode 6.3+ isolate characters.",
    ),
    _entry(
        "\u061C",
        "Arabic Letter Mark",
        "ALM",
        "Arabic Letter Mark",
        "Arabic list with digits: \u061C1. مرحبا\n\u061C2. شكرا\n"
        "Phone in Arabic UI: الهاتف: \u061C+971 4 123 4567",
        "Strong RTL mark that behaves like an Arabic letter. Keeps leading digits and signs on the correct side in Arabic UI strings; without it list numbers and phone prefixes jump to the wrong end.",
    ),
    _entry(
        "\u2008",
        "Punctuation Space",
        "PUNCSP",
        "Punctuation Space",
        "Aligned totals:\n1,234.50\n\u2008\u200899.00\n"
        "Table cell: 12\u2008345",
        "Same width as a period or comma. Used to align decimal columns; replacing it with a regular space shifts digits out of their columns.",
    ),
    _entry(
        "\u200A",
        "Hair Space",
        "HRSP",
        "Hair Space",
        "Em dash spacing: word\u200A—\u200Aword\n"
        "Initials: J.\u200AR.\u200AR. Tolkien",
        "Thinnest typographic space. Used around dashes and between initials; a regular space in its place produces visibly loose text and allows unwanted line breaks.",
    ),
)

REGISTRY: Mapping[str, CharacterEntry] = MappingProxyType(
    {entry.char: entry for entry in _ENTRIES}
)
"""Immutable mapping of character to its entry, in display order."""

NOTABLE_CHARS: frozenset[str] = frozenset(REGISTRY)

_ORDER: Mapping[str, int] = MappingProxyType(
    {char: index for index, char in enumerate(REGISTRY)}
)


def lookup(char: str, registry: Mapping[str, CharacterEntry] | None = None) -> CharacterEntry | None:
    """Return the registry entry for ``char``, or None if it is not notable."""
    table = REGISTRY if registry is None else registry
    return table.get(char)


def fallback_entry(char: str) -> CharacterEntry:
    """Synthesize an entry for a character that has no registry metadata.

    The code is computed from the code point, the description is
    ``"Special Character"`` and the glyph is the raw character.
    """
    return CharacterEntry(
        char=char,
        name=FALLBACK_DESCRIPTION,
        code=format_code_point(char),
        glyph=char,
        long_name=FALLBACK_DESCRIPTION,
        example="",
        usage="",
    )


def entry_for(char: str, registry: Mapping[str, CharacterEntry] | None = None) -> CharacterEntry:
    """Return the registry entry for ``char``, falling back to a synthesized one."""
    entry = lookup(char, registry)
    if entry is None:
        return fallback_entry(char)
    return entry


def iter_entries(registry: Mapping[str, CharacterEntry] | None = None) -> Iterator[CharacterEntry]:
    """Yield registry entries in display order."""
    table = REGISTRY if registry is None else registry
    yield from table.values()


def color_for(char: str) -> str:
    """Return the highlight colour for ``char``.

    Characters outside the registry get the first palette colour.
    """
    index = _ORDER.get(char, 0)
    return HIGHLIGHT_COLORS[index % len(HIGHLIGHT_COLORS)]


def split_by_usage(
    counts: Mapping[str, int],
    registry: Mapping[str, CharacterEntry] | None = None,
) -> tuple[list[CharacterEntry], list[CharacterEntry]]:
    """Partition registry entries into (used, additional) by occurrence count.

    Both lists keep registry order.
    """
    used: list[CharacterEntry] = []
    additional: list[CharacterEntry] = []
    for entry in iter_entries(registry):
        if counts.get(entry.char, 0) > 0:
            used.append(entry)
        else:
            additional.append(entry)
    return used, additional
