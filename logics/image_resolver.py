import re
from urllib.parse import urlparse, parse_qs


STATE_EMPTY = 'empty'           # No image selected
STATE_PENDING = 'pending'       # Current candidate is being loaded
STATE_LOADED = 'loaded'
STATE_EXHAUSTED = 'exhausted'   # Every candidate failed

DRIVE_FILE_RE = re.compile(r'https://drive\.google\.com/file/d/([a-zA-Z0-9_-]+)')
DRIVE_HOSTS = ('drive.google.com', 'docs.google.com')

# Thumbnail widths tried before the raw export endpoint
DRIVE_THUMBNAIL_SIZES = ('w1000', 'w2000')


def extract_drive_id(url):
    """
    Return the file ID of a shared-drive link, or None.

    Recognises:
        https://drive.google.com/file/d/<ID>/view?usp=sharing
        https://drive.google.com/open?id=<ID>
        https://drive.google.com/uc?export=download&id=<ID>
    """
    if not url:
        return None
    match = DRIVE_FILE_RE.search(url.strip())
    if match:
        return match.group(1)

    parsed = urlparse(url.strip())
    if parsed.scheme == 'https' and parsed.netloc in DRIVE_HOSTS:
        ids = parse_qs(parsed.query).get('id')
        if ids and re.fullmatch(r'[a-zA-Z0-9_-]+', ids[0]):
            return ids[0]
    return None


def build_candidates(url):
    """
    Ordered list of URLs to try for one image reference.

    Drive files get progressively larger thumbnails, then the export
    endpoint as last resort. Any other URL is its own single candidate,
    passed through unchanged. Blank input has no candidates.
    """
    if not url or not url.strip():
        return []
    file_id = extract_drive_id(url)
    if file_id is None:
        return [url]

    candidates = [
        f"https://drive.google.com/thumbnail?id={file_id}&sz={size}"
        for size in DRIVE_THUMBNAIL_SIZES
    ]
    candidates.append(f"https://drive.google.com/uc?export=view&id={file_id}")
    return candidates


class ImageResolver:
    """
    Fallback cursor over the candidates of the current image URL.

    The cursor only moves forward, on report_failure(). Reaching the end of
    the list puts the resolver in STATE_EXHAUSTED, where the original URL is
    still offered for opening externally.

    Example:
        resolver = ImageResolver()
        resolver.set_url(row['photo'])
        while resolver.state == STATE_PENDING:
            if try_load(resolver.current):
                resolver.report_success()
            else:
                resolver.report_failure()
    """

    def __init__(self):
        self.url = ''
        self.candidates = []
        self.index = 0
        self.state = STATE_EMPTY
        self.generation = 0     # Bumped on every URL change

    def set_url(self, url):
        url = '' if url is None else str(url)
        if url == self.url and self.generation:
            return False

        self.url = url
        self.candidates = build_candidates(url)
        self.index = 0
        self.state = STATE_PENDING if self.candidates else STATE_EMPTY
        self.generation += 1
        return True

    @property
    def current(self):
        if self.state in (STATE_PENDING, STATE_LOADED):
            return self.candidates[self.index]
        return None

    @property
    def fallback_url(self):
        return self.url

    def report_success(self):
        if self.state == STATE_PENDING:
            self.state = STATE_LOADED

    def report_failure(self):
        if self.state != STATE_PENDING:
            return self.state
        if self.index + 1 < len(self.candidates):
            self.index += 1
        else:
            self.state = STATE_EXHAUSTED
        return self.state
