import re
import unicodedata

import mwparserfromhell

from la_nominal.errors import TemplateError

ArgMap = dict[str, str]


def parse_template(text: str) -> ArgMap:
    """
    Parses a MediaWiki template call like {{la-ndecl|puer<2>|num=sg}} into a map.
    The template name is stored under "0", positional parameters under "1", "2", ...
    Wiki links inside values are kept verbatim; a pipe inside [[...]] does not split.
    """
    wikicode = mwparserfromhell.parse(re.sub(r"[\r\n]", "", text))
    templates = wikicode.filter_templates(recursive=False)
    if not templates:
        raise TemplateError(f"No template found in {text!r}")

    template = templates[0]
    args: ArgMap = {"0": str(template.name).strip()}
    for param in template.params:
        name = str(param.name).strip()
        value = str(param.value)
        # MediaWiki trims named parameters but keeps positional ones as written
        args[name] = value.strip() if param.showkey else value
    return args


def read_list(args: ArgMap, elem: str) -> list[str]:
    """
    Reads a numbered parameter list: head=a|head2=b|head3=c becomes [a, b, c].
    """
    pattern = re.compile(rf"^{re.escape(elem)}([0-9]*)$")
    entries: dict[int, str] = {}
    for key, value in args.items():
        match = pattern.match(key)
        if not match:
            continue
        idx = int(match.group(1)) - 1 if match.group(1) else 0
        entries[idx] = value
    return [entries[idx] for idx in sorted(entries)]


def remove_links(text: str) -> str:
    """[[target|title]] becomes title, [[word]] becomes word."""
    text = re.sub(r"\[\[[^\]]*?\|([^\]]*?)\]\]", r"[[\1]]", text)
    return re.sub(r"\[\[([^\]]*?)\]\]", r"\1", text)


def remove_html(text: str) -> str:
    """Strips simple, non-nested tags: '<i lang="la">data</i>' becomes 'data'."""
    return re.sub(r"<.*?>(.*?)</.*?>", r"\1", text)


def strip_macrons(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text).replace("\u0304", "")
    return unicodedata.normalize("NFC", decomposed)


def remove_diacritical(text: str) -> str:
    """Removes every combining mark except the macron."""
    decomposed = unicodedata.normalize("NFD", text)
    decomposed = re.sub("[\u0300-\u0303\u0305-\u036f]", "", decomposed)
    return unicodedata.normalize("NFC", decomposed)


def extract_base(lemma: str, ending: str) -> str | None:
    """
    Returns the part of `lemma` before `ending`, or None if it does not end that way.
    An ending containing a capture group is used as the full regex and its first
    group is returned.
    """
    regex = ending if "(" in ending else f"^(.*){ending}$"
    match = re.search(regex, lemma)
    if match:
        return match.group(1)
    return None
