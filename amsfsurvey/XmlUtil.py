'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

import os

from lxml import etree, html

from amsfsurvey.PythonUtil import normalizeSpace
from amsfsurvey.SurveyErrors import MalformedArtifact, MissingArtifact


def artifactParser() -> etree.XMLParser:
    # taxonomy artifacts are local files, never resolve entities or fetch DTDs
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False,
                           remove_comments=True, remove_pis=True, huge_tree=False)


def parseArtifact(filePath: str) -> etree._ElementTree:
    """Parses a taxonomy XML artifact, raising MissingArtifact or MalformedArtifact."""
    if not os.path.isfile(filePath):
        raise MissingArtifact(filePath)
    try:
        return etree.parse(filePath, parser=artifactParser())
    except etree.XMLSyntaxError as err:
        raise MalformedArtifact(filePath, err.msg or str(err)) from err
    except OSError as err:
        raise MalformedArtifact(filePath, err) from err


def htmlText(markup: str | None) -> str:
    """Plain text of label markup such as "<b>Oui</b> ou <i>Non</i>", empty string for None or empty markup."""
    if markup is None or not markup.strip():
        return ""
    try:
        fragments = html.fragments_fromstring(markup)
    except (etree.ParserError, ValueError):
        return normalizeSpace(markup)
    text = []
    for fragment in fragments:
        if isinstance(fragment, str):
            text.append(fragment)
        else:
            text.append(fragment.text_content())
            text.append(fragment.tail or "")
    return normalizeSpace("".join(text))


def innerText(element: etree._Element) -> str:
    return "".join(element.itertext())
