"""Blog constants: pagination and header image processing."""

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50

# Header images are re-encoded before upload
HEADER_IMAGE_MAX_WIDTH = 1200
HEADER_IMAGE_WEBP_QUALITY = 82
HEADER_IMAGE_PREFIX = "blog"
HEADER_IMAGE_MAX_BYTES = 10 * 1024 * 1024
