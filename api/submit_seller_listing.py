"""Create-listing endpoint for Vercel."""

from http.server import BaseHTTPRequestHandler
import logging

from src.services.listing_store import PayloadError, save_listing_payload
from src.utils.errors import SupabaseError
from src.utils.http import read_json_body, run_async, send_json
from src.utils.logging import correlation_context
from src.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
_logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """POST a normalized wizard payload; responds 201 with the created row."""

    def do_POST(self):
        header = LoggingConfig.LOG_CORRELATION_ID_HEADER
        with correlation_context(self.headers.get(header)) as correlation_id:
            response_headers = {header: correlation_id}
            try:
                payload = read_json_body(self)
            except ValueError:
                send_json(self, 400, {"error": "Request body must be valid JSON"}, response_headers)
                return

            try:
                listing = run_async(save_listing_payload(payload))
            except PayloadError as e:
                send_json(self, 400, {"error": str(e)}, response_headers)
                return
            except SupabaseError as e:
                _logger.error(f"Listing create failed: {e}")
                send_json(self, 500, {"error": "Failed to save listing"}, response_headers)
                return

            send_json(self, 201, listing, response_headers)
