from quart import Quart
from quart_schema import Info, QuartSchema

from login_provider.provider_states import ProviderStateManager


def create_app() -> Quart:
    app = Quart(__name__)
    QuartSchema(
        app,
        info=Info(title="Login provider API", version="0.1.0"),
        tags=[
            {"name": "Auth", "description": "Auth APIs"},
            {"name": "Provider States", "description": "Provider state APIs for contract verification"},
        ],
    )
    app.json.sort_keys = False
    ProviderStateManager().init_app(app)
    _register_blueprints(app)
    return app


def _register_blueprints(app: Quart) -> None:
    from login_provider.api._hidden._hidden import bp_hidden
    from login_provider.api.auth.auth import bp_auth
    from login_provider.api.provider_state.provider_state import bp_provider_state
    from login_provider.handlers.error_handlers import bp_error_handler
    from login_provider.handlers.request_handlers import bp_request_handler

    app.register_blueprint(bp_auth, name=bp_auth.name)
    app.register_blueprint(bp_provider_state, name=bp_provider_state.name)
    app.register_blueprint(bp_hidden, name=bp_hidden.name)
    app.register_blueprint(bp_request_handler, name=bp_request_handler.name)
    app.register_blueprint(bp_error_handler, name=bp_error_handler.name)


app = create_app()
