from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from .color_math import hex_to_hsl, hex_to_rgb
from .config import DEFAULT_CONFIG, ENV_PREFIX
from .errors import (
    DuplicateColorError,
    FormatError,
    NotFoundError,
    OwnershipError,
    SupplyExhaustedError,
)
from .registry import ColorRegistry
from .validation import require_valid_color

log = logging.getLogger(__name__)

ERROR_STATUS: Mapping[type, int] = {
    FormatError: 400,
    OwnershipError: 403,
    NotFoundError: 404,
    DuplicateColorError: 409,
    SupplyExhaustedError: 409,
}


def _registry() -> ColorRegistry:
    return current_app.extensions["paint_registry"]


def _color_arg() -> str:
    # '#' starts a URL fragment, so colors travel as ?color=%23RRGGBB
    return require_valid_color(request.args.get("color", ""))


def _json_body() -> dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise FormatError("request body must be a JSON object")
    return body


def _token_id(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise FormatError(f"tokenId must be an integer: {value!r}")
    return value


# ----------------------------- Flask app ----------------------------------


def create_app(
    config: Optional[Mapping[str, Any]] = None,
    registry: Optional[ColorRegistry] = None,
) -> Flask:
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    if config:
        app.config.update(config)
    app.config.from_prefixed_env(ENV_PREFIX)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"], format="%(levelname)s: %(message)s"
    )

    if registry is None:
        registry = ColorRegistry(
            max_supply=int(app.config["MAX_SUPPLY"]),
            name=app.config["COLLECTION_NAME"],
            symbol=app.config["COLLECTION_SYMBOL"],
        )
    app.extensions["paint_registry"] = registry

    for exc_type, status in ERROR_STATUS.items():
        app.register_error_handler(
            exc_type, lambda e, status=status: (jsonify({"error": str(e)}), status)
        )

    @app.route("/")
    def index():
        reg = _registry()
        return jsonify(
            {
                "name": reg.name,
                "symbol": reg.symbol,
                "totalSupply": reg.total_supply,
                "maxSupply": reg.max_supply,
            }
        )

    @app.post("/mint")
    def mint():
        body = _json_body()
        color = body.get("color")
        owner = body.get("owner")
        if not isinstance(owner, str) or not owner:
            raise FormatError("owner is required")
        token_id = _registry().mint(color, owner)
        return jsonify({"tokenId": token_id, "color": color, "owner": owner}), 201

    @app.post("/transfer")
    def transfer():
        body = _json_body()
        token_id = _token_id(body.get("tokenId"))
        sender, recipient = body.get("from"), body.get("to")
        if not isinstance(sender, str) or not isinstance(recipient, str):
            raise FormatError("'from' and 'to' are required")
        _registry().transfer(sender, recipient, token_id)
        return jsonify({"tokenId": token_id, "owner": recipient})

    @app.route("/colors")
    def colors():
        return jsonify(_registry().all_colors())

    @app.route("/colors/<int:index>")
    def color_at(index: int):
        return jsonify({"tokenId": index, "color": _registry().color_at(index)})

    @app.route("/tokens/<int:token_id>")
    def token(token_id: int):
        reg = _registry()
        return jsonify(
            {
                "tokenId": token_id,
                "color": reg.color_at(token_id),
                "owner": reg.owner_of(token_id),
                "tokenURI": reg.token_uri(token_id),
            }
        )

    @app.route("/token-for-color")
    def token_for_color():
        color = _color_arg()
        return jsonify({"color": color, "tokenId": _registry().token_for_color(color)})

    @app.route("/owners/<owner>/colors")
    def owner_colors(owner: str):
        reg = _registry()
        if request.args.get("current", "").lower() in {"1", "true", "yes"}:
            return jsonify(reg.colors_held_by(owner))
        return jsonify(reg.colors_owned_by(owner))

    @app.route("/metadata")
    def metadata():
        color = _color_arg()
        return jsonify({"color": color, "tokenURI": _registry().metadata_for_color(color)})

    @app.route("/hsl")
    def hsl():
        color = _color_arg()
        return jsonify(
            {"color": color, "rgb": list(hex_to_rgb(color)), "hsl": list(hex_to_hsl(color))}
        )

    @app.errorhandler(Exception)
    def unexpected(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        log.exception("Request failed")
        return jsonify({"error": "internal error"}), 500

    return app


if __name__ == "__main__":
    create_app().run(debug=False, threaded=True)
