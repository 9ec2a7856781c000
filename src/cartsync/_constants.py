"""Internal constants shared across the library."""

BASE_URL = "http://localhost:3000"
USER_AGENT = "cartsync/aiohttp"

INVENTORY_PATH = "/inventory"
CART_PATH = "/cart"
CHECKOUT_PATH = "/checkout"

DEFAULT_REQUEST_TIMEOUT: float = 10.0

# Upper bound on observer passes triggered by mutations made from inside the observer.
MAX_NOTIFY_PASSES = 100
