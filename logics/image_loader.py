from io import BytesIO

import requests
from PIL import Image


FETCH_TIMEOUT = 15
HEADERS = {'User-Agent': 'Mozilla/5.0 (record-editor image pane)'}

# Used until the image pane has been laid out
DEFAULT_FIT = (640, 640)
PANE_MARGIN = (20, 60)


def fit_size(pane_width, pane_height):
    """Bounding box for thumbnailing an image into a pane of the given size."""
    if pane_width < 50 or pane_height < 50:
        return DEFAULT_FIT
    return (max(1, pane_width - PANE_MARGIN[0]), max(1, pane_height - PANE_MARGIN[1]))


class ImageLoadError(Exception):
    """A candidate URL could not be fetched or is not an image."""


def fetch_image(url, timeout=FETCH_TIMEOUT):
    """
    Download url and decode it as an image.

    Args:
        url: Candidate URL produced by the image resolver.
        timeout: Seconds before the request is abandoned.

    Returns:
        PIL.Image.Image with its pixel data loaded.

    Raises:
        ImageLoadError: Network error, HTTP error status, or a body that is
            not a decodable image (e.g. an access-denied HTML page).
    """
    try:
        response = requests.get(url, timeout=timeout, headers=HEADERS, allow_redirects=True)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise ImageLoadError(f"Could not fetch {url}: {exc}") from exc

    try:
        img = Image.open(BytesIO(response.content))
        img.load()
    except (OSError, Image.DecompressionBombError) as exc:
        content_type = response.headers.get('Content-Type', 'unknown')
        raise ImageLoadError(f"Not an image ({content_type}): {url}") from exc

    return img
