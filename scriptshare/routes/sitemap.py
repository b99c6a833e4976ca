"""Sitemap of shared scripts, the document search engines are pinged about"""

from xml.etree import ElementTree

from fastapi import APIRouter, Depends, Response

from scriptshare.config import Config, get_config
from scriptshare.services.script import ScriptService

sitemap_router = APIRouter(tags=["Sitemap"])

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
# the sitemap protocol allows 50000 urls per file
SITEMAP_LIMIT = 50000


@sitemap_router.get("/sitemap.xml", response_class=Response)
def read_sitemap(
    config: Config = Depends(get_config),
    script_service: ScriptService = Depends(),
):
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    site_url = config.site_url.rstrip("/")
    for script in script_service.get_all(limit=SITEMAP_LIMIT).items:
        url = ElementTree.SubElement(urlset, "url")
        ElementTree.SubElement(url, "loc").text = f"{site_url}/script/{script.permalink}"
        ElementTree.SubElement(url, "lastmod").text = script.created_at.date().isoformat()
    body = ElementTree.tostring(urlset, encoding="utf-8", xml_declaration=True)
    return Response(content=body, media_type="application/xml")
