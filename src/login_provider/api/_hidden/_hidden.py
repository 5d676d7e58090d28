from quart import Blueprint
from quart_schema import hide

bp_hidden = Blueprint("Hidden", __name__)


@bp_hidden.get("/healthcheck")
@hide
async def healthcheck() -> str:
    """A healthcheck API used by tests to determine the app is ready or not"""
    return "ok"
