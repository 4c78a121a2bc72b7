"""BibTeX parsing and conversion to CSL-JSON item records."""
import logging
import re
from typing import Any, Dict, List

import bibtexparser
from bibtexparser.bparser import BibTexParser
from bibtexparser.customization import convert_to_unicode

from ..exceptions import BibTeXError

logger = logging.getLogger(__name__)

CSL_TYPES = {
    "article": "article-journal",
    "book": "book",
    "booklet": "pamphlet",
    "inbook": "chapter",
    "incollection": "chapter",
    "inproceedings": "paper-conference",
    "conference": "paper-conference",
    "manual": "report",
    "mastersthesis": "thesis",
    "phdthesis": "thesis",
    "techreport": "report",
    "unpublished": "manuscript",
    "misc": "article",
    "online": "webpage",
}

# BibTeX field -> CSL variable, copied as plain text
FIELD_MAP = {
    "title": "title",
    "journal": "container-title",
    "booktitle": "container-title",
    "volume": "volume",
    "number": "issue",
    "edition": "edition",
    "publisher": "publisher",
    "address": "publisher-place",
    "doi": "DOI",
    "url": "URL",
    "isbn": "ISBN",
    "issn": "ISSN",
    "abstract": "abstract",
    "note": "note",
}

_BRACES = re.compile(r"[{}]")


def parse_bibtex(content: str) -> List[Dict[str, Any]]:
    """Parse BibTeX content using bibtexparser library.

    Args:
        content: BibTeX content as string

    Returns:
        List of parsed BibTeX entry dictionaries

    Raises:
        BibTeXError: If parsing fails
    """
    try:
        parser = BibTexParser(common_strings=True)
        parser.customization = convert_to_unicode
        parser.ignore_comments = True
        parser.homogenize_fields = True

        bib_database = bibtexparser.loads(content, parser=parser)
    except Exception as e:
        logger.error(f"BibTeX parsing failed: {e}\nContent snippet: {content[:200]}...")
        raise BibTeXError(f"Failed to parse BibTeX content: {e}")

    if not bib_database.entries:
        logger.warning("bibtexparser parsed the string but found no valid entries.")
        return []

    logger.info(f"Successfully parsed {len(bib_database.entries)} BibTeX entries")
    return bib_database.entries


def parse_bibtex_file(file_path: str) -> List[Dict[str, Any]]:
    """Parse a BibTeX file.

    Raises:
        BibTeXError: If file reading or parsing fails
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        raise BibTeXError(f"Failed to read BibTeX file {file_path}: {e}")
    return parse_bibtex(content)


def _clean(value: Any) -> str:
    return _BRACES.sub("", str(value)).strip()


def parse_names(value: str) -> List[Dict[str, str]]:
    """Split a BibTeX name list into CSL name objects.

    Handles ``Last, First`` and ``First Last``; a braced single name such as
    ``{World Health Organization}`` becomes a literal.
    """
    names = []
    for raw in re.split(r"\s+and\s+", value.strip()):
        raw = raw.strip()
        if not raw:
            continue
        if raw.startswith("{") and raw.endswith("}"):
            names.append({"literal": _clean(raw)})
            continue

        raw = _clean(raw)
        if "," in raw:
            family, given = raw.split(",", 1)
            names.append({"family": family.strip(), "given": given.strip()})
        else:
            parts = raw.split()
            if len(parts) == 1:
                names.append({"family": parts[0]})
            else:
                names.append({"family": parts[-1], "given": " ".join(parts[:-1])})
    return names


def entry_to_csl(entry: Dict[str, Any]) -> Dict[str, Any]:
    """Convert one bibtexparser entry to a CSL-JSON item record."""
    entry_type = entry.get("ENTRYTYPE", "misc").lower()
    item: Dict[str, Any] = {
        "id": entry["ID"],
        "type": CSL_TYPES.get(entry_type, "article"),
    }

    for bib_field, csl_field in FIELD_MAP.items():
        if entry.get(bib_field) and csl_field not in item:
            item[csl_field] = _clean(entry[bib_field])

    for role in ("author", "editor"):
        if entry.get(role):
            item[role] = parse_names(entry[role])

    if entry.get("pages"):
        item["page"] = _clean(entry["pages"]).replace("--", "-").replace("–", "-")

    year = _clean(entry.get("year", ""))
    if year.isdigit():
        item["issued"] = {"date-parts": [[int(year)]]}
    elif year:
        item["issued"] = {"raw": year}

    if entry_type in ("phdthesis", "mastersthesis") and entry.get("school"):
        item["publisher"] = _clean(entry["school"])
    elif entry_type == "techreport" and entry.get("institution"):
        item["publisher"] = _clean(entry["institution"])

    return item


def load_bibtex_items(file_path: str) -> List[Dict[str, Any]]:
    """Read a .bib file as a list of CSL-JSON item records."""
    return [entry_to_csl(entry) for entry in parse_bibtex_file(file_path)]
