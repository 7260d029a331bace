"""
Site-wide metadata for the public pages (titles, Open Graph and Twitter cards).
"""
from fastapi import APIRouter

from studio_gateway.config import settings

router = APIRouter(prefix="/site", tags=["site"])

SITE_DESCRIPTION = (
    "Professional photography services for weddings, portraits, events, and products. "
    "Capturing your special moments with elegance and style."
)

SITE_KEYWORDS = [
    "photography",
    "professional photographer",
    "wedding photography",
    "portrait photography",
    "event photography",
    "product photography",
    "photo studio",
    "photography services",
    "commercial photography",
    "fashion photography",
    "family portraits",
    "corporate photography",
]


def build_site_metadata(site_url: str, site_name: str) -> dict:
    """
    Build the default page metadata document.

    Args:
        site_url: Public origin of the site
        site_name: Studio name used in titles

    Returns:
        dict: Title template, description, keywords, Open Graph and Twitter data
    """
    site_url = site_url.rstrip("/")
    default_title = f"{site_name} | Professional Photography"
    og_image = f"{site_url}/og-image.jpg"
    return {
        "metadataBase": site_url,
        "title": {"default": default_title, "template": f"%s | {site_name}"},
        "description": SITE_DESCRIPTION,
        "keywords": SITE_KEYWORDS,
        "authors": [{"name": site_name}],
        "openGraph": {
            "type": "website",
            "locale": "en_US",
            "url": site_url,
            "siteName": site_name,
            "title": default_title,
            "description": SITE_DESCRIPTION,
            "images": [
                {
                    "url": og_image,
                    "width": 1200,
                    "height": 630,
                    "alt": f"{site_name} - Professional Photography Services",
                }
            ],
        },
        "twitter": {
            "card": "summary_large_image",
            "title": default_title,
            "description": SITE_DESCRIPTION,
            "images": [og_image],
        },
        "robots": {"index": True, "follow": True},
    }


@router.get("/metadata")
async def site_metadata():
    return build_site_metadata(settings.SITE_URL, settings.STUDIO_NAME)
