from quart import Blueprint, Response, abort, jsonify
from quart import current_app as app
from quart_schema import tag, validate_request

from login_provider.api.user.models import UserNotFoundError
from login_provider.provider_states import get_state_manager

from .models import LoginRequest, LoginResponse

bp_auth = Blueprint("Auth", __name__, url_prefix="/users")
tag_auth = tag(["Auth"])


@bp_auth.post("/login/")
@bp_auth.post("/login/<user_id>")
@tag_auth
@validate_request(LoginRequest)
async def login(data: LoginRequest, user_id: str | None = None) -> tuple[Response, int]:
    """Login

    Authenticates the user against the dataset selected by the current provider state
    """
    repository = get_state_manager().repository
    try:
        user = repository.by_username(data.username)
    except UserNotFoundError as e:
        abort(404, str(e))

    if user.password != data.password or not user.is_authorized:
        app.logger.info(f"Rejected login for user '{data.username}'")
        abort(401)

    return jsonify(LoginResponse(user=user.to_public()).model_dump(mode="json")), 200
