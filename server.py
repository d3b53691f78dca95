"""Entry point for the document search HTTP service."""

from __future__ import annotations

import json
import logging
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from urllib.parse import parse_qs, urlparse

from config_loader import AppConfig, load_config
from indexer import DocumentStatus
from search_server import SearchServer

LOGGER = logging.getLogger("search_server")

API_PREFIX = "/api/v1"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class SearchRequestHandler(BaseHTTPRequestHandler):
    """HTTP handler exposing health, search, match and document listing endpoints."""

    search_server: SearchServer
    logger: logging.Logger
    lock = threading.Lock()

    def do_GET(self) -> None:
        parsed = urlparse(self.path)
        path = parsed.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        query_params = parse_qs(parsed.query)

        routes = {
            "/health": self._handle_health,
            "/search": self._handle_search,
            "/match": self._handle_match,
            "/documents": self._handle_documents,
        }
        handler = routes.get(path)
        if handler is None:
            self._respond(
                HTTPStatus.NOT_FOUND,
                {"error": "Not found", "message": "Use GET /search?q=<text>"},
            )
            return

        try:
            handler(query_params)
        except Exception as exc:
            self.logger.exception("Request failed: %s", self.path)
            self._respond(
                HTTPStatus.INTERNAL_SERVER_ERROR,
                {"error": "internal server error", "details": str(exc)},
            )

    def _handle_health(self, _params: dict[str, list[str]]) -> None:
        self._respond(HTTPStatus.OK, {"status": "ok"})

    def _handle_search(self, params: dict[str, list[str]]) -> None:
        query = _first(params, "q")
        if not query:
            self._respond(HTTPStatus.BAD_REQUEST, {"error": "Missing query parameter 'q'"})
            return

        status_raw = _first(params, "status", DocumentStatus.ACTUAL.value).strip().upper()
        if status_raw not in DocumentStatus.__members__:
            self._respond(
                HTTPStatus.BAD_REQUEST,
                {"error": f"Unknown document status '{status_raw}'"},
            )
            return

        with self.lock:
            results = self.search_server.find_top_documents(query, DocumentStatus[status_raw])

        if results is None:
            self._respond(HTTPStatus.BAD_REQUEST, {"error": "Invalid search query"})
            return

        items = [
            {"document_id": item.id, "relevance": item.relevance, "rating": item.rating}
            for item in results
        ]
        self._respond(HTTPStatus.OK, {"query": query, "total": len(items), "items": items})

    def _handle_match(self, params: dict[str, list[str]]) -> None:
        query = _first(params, "q")
        try:
            document_id = int(_first(params, "id"))
        except ValueError:
            self._respond(HTTPStatus.BAD_REQUEST, {"error": "Invalid query parameter 'id'"})
            return

        with self.lock:
            found = self.search_server.has_document(document_id)
            matched = self.search_server.match_document(query, document_id) if found else None

        if not found:
            self._respond(
                HTTPStatus.NOT_FOUND,
                {"error": f"Document {document_id} is not indexed"},
            )
            return
        if matched is None:
            self._respond(HTTPStatus.BAD_REQUEST, {"error": "Invalid search query"})
            return

        words, status = matched
        self._respond(
            HTTPStatus.OK,
            {"document_id": document_id, "words": words, "status": status.value},
        )

    def _handle_documents(self, _params: dict[str, list[str]]) -> None:
        with self.lock:
            count = self.search_server.get_document_count()
            ids = [self.search_server.get_document_id(index) for index in range(count)]
        self._respond(HTTPStatus.OK, {"total": count, "ids": ids})

    def _respond(self, status: HTTPStatus, payload: dict[str, object]) -> None:
        body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
        headers = {
            "Content-Type": JSON_CONTENT_TYPE,
            "Content-Length": str(len(body)),
        }
        self.send_response(status)
        for name, value in headers.items():
            self.send_header(name, value)
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: object) -> None:
        self.logger.info("%s %s", self.address_string(), format % args)


def build_search_server(config: AppConfig, logger: logging.Logger) -> SearchServer:
    """Create a search server seeded with the configured stop words and documents."""
    search_server = SearchServer(config.stop_words, logger=logger.getChild("indexer"))
    added = 0
    for document in config.documents:
        if search_server.add_document(
            document.document_id, document.text, document.status, document.ratings
        ):
            added += 1
        else:
            logger.warning("Seed document %d was not indexed", document.document_id)

    logger.info("Indexed %d of %d seed documents", added, len(config.documents))
    return search_server


def _first(params: dict[str, list[str]], name: str, default: str = "") -> str:
    return (params.get(name) or [default])[0]


def create_http_server(
    config: AppConfig, search_server: SearchServer, logger: logging.Logger
) -> ThreadingHTTPServer:
    """Bind the configured address and attach the search server to the request handler."""
    SearchRequestHandler.search_server = search_server
    SearchRequestHandler.logger = logger
    return ThreadingHTTPServer((config.host, config.port), SearchRequestHandler)


def main() -> None:
    """Load configuration, index seed documents, and serve until interrupted."""
    config = load_config(Path(__file__).resolve().parent / "config.yml")
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    search_server = build_search_server(config, LOGGER)
    with create_http_server(config, search_server, LOGGER) as httpd:
        host, port = httpd.server_address[:2]
        LOGGER.info("Serving %d documents on http://%s:%d", search_server.get_document_count(), host, port)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            LOGGER.info("Interrupted, shutting down")
    LOGGER.info("Server stopped")


if __name__ == "__main__":
    main()
