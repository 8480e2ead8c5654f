from __future__ import annotations

from typing import Iterable
from xml.etree.ElementTree import Element, SubElement, tostring

from .models import SitemapEntry

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def render_sitemap_xml(entries: Iterable[SitemapEntry]) -> str:
    """
    Renders entries as a sitemap protocol <urlset>.
    Optional fields are left out when the entry does not carry them.
    """
    urlset = Element("urlset")
    urlset.set("xmlns", SITEMAP_NS)

    for entry in entries:
        url_el = SubElement(urlset, "url")
        SubElement(url_el, "loc").text = entry.url
        if entry.last_modified is not None:
            SubElement(url_el, "lastmod").text = entry.last_modified.strftime("%Y-%m-%d")
        if entry.change_frequency:
            SubElement(url_el, "changefreq").text = entry.change_frequency
        if entry.priority is not None:
            SubElement(url_el, "priority").text = str(entry.priority)

    body = tostring(urlset, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + body + "\n"
