"""AI listing description endpoint for Vercel."""

from http.server import BaseHTTPRequestHandler
import logging

from pydantic import ValidationError

from src.models.description import DescriptionRequest
from src.services.description_generator import generate_listing_description
from src.utils.errors import DescriptionError
from src.utils.http import read_json_body, send_json
from src.utils.logging import correlation_context
from src.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
_logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """POST seller answers, receive ``{"description": ...}``."""

    def do_POST(self):
        header = LoggingConfig.LOG_CORRELATION_ID_HEADER
        with correlation_context(self.headers.get(header)) as correlation_id:
            response_headers = {header: correlation_id}
            try:
                body = read_json_body(self)
                request = DescriptionRequest.model_validate(body)
            except (ValueError, ValidationError) as e:
                _logger.warning(f"Rejected description request: {e}")
                send_json(self, 400, {"message": "Invalid request body"}, response_headers)
                return

            try:
                description = generate_listing_description(request)
            except DescriptionError as e:
                _logger.error(f"Description generation failed: {e}")
                send_json(self, 500, {"message": str(e)}, response_headers)
                return

            send_json(self, 200, {"description": description}, response_headers)

    def do_GET(self):
        send_json(self, 405, {"message": "Method not allowed"})
