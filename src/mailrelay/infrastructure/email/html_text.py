from __future__ import annotations

from bs4 import BeautifulSoup

_DROP_TAGS = ["script", "style", "head", "title", "noscript"]


def html_to_text(html: str) -> str:
    """Strip markup from an HTML body, one text block per line."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(_DROP_TAGS):
        tag.extract()
    for br in soup.find_all("br"):
        br.replace_with("\n")

    lines = (line.strip() for line in soup.get_text("\n").splitlines())
    return "\n".join(line for line in lines if line)
