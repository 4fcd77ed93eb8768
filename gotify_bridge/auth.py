import hmac
import logging
from functools import wraps

from flask import Response, request

logger = logging.getLogger(__name__)


def _matches(given, expected):
    return given is not None and hmac.compare_digest(given.encode("utf-8"), expected.encode("utf-8"))


def basic_auth_required(view, username, password):
    """
    Protege a view com HTTP basic auth.
    Sem usuário ou senha configurados a view é devolvida sem proteção.
    """
    if not (username and password):
        return view

    @wraps(view)
    def wrapper(*args, **kwargs):
        auth = request.authorization
        if auth is None or not (_matches(auth.username, username) and _matches(auth.password, password)):
            logger.warning(f"Invalid HTTP auth from `{request.remote_addr}`")
            return Response(
                "Invalid username or password\n",
                status=401,
                mimetype="text/plain",
                headers={"WWW-Authenticate": 'Basic realm="metrics"'},
            )
        return view(*args, **kwargs)

    return wrapper
