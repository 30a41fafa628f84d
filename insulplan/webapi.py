"""HTTP service that generates insulation plans for the sample buildings."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from flask import Flask, Response, jsonify, request

from .buildings import create_request
from .planning import generate_plan

_FLOAT_PARAMS = ("length", "height", "width", "velocity")


def _plan_params(args) -> dict:
    try:
        params = {"request_id": int(args["request_id"])}
        for name in _FLOAT_PARAMS:
            params[name] = float(args[name])
    except KeyError as missing:
        raise ValueError(f"missing query parameter: {missing.args[0]}") from None
    except ValueError as bad:
        raise ValueError(f"invalid query parameter: {bad}") from None
    return params


def create_app() -> Flask:
    """The web application with its routes."""
    app = Flask(__name__)

    @app.get("/")
    def hello() -> Response:
        return Response("Hello world!", mimetype="text/plain")

    @app.post("/echo")
    def echo() -> Response:
        return Response(request.get_data(), mimetype="text/plain")

    @app.get("/hey")
    def manual_hello() -> Response:
        return Response("Hey there!", mimetype="text/plain")

    @app.get("/generateplan")
    def generate() -> Response:
        try:
            plan_request = create_request(**_plan_params(request.args))
        except ValueError as error:
            return Response(str(error), status=400, mimetype="text/plain")
        return jsonify(generate_plan(plan_request).to_dict())

    @app.after_request
    def allow_any_origin(response: Response) -> Response:
        if request.headers.get("Origin"):
            response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Serve insulation plans over HTTP.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    create_app().run(host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())