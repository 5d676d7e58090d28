import argparse

from login_provider import app

DEFAULT_PORT = 5000


def parse_pargs() -> argparse.Namespace:
    parser = argparse.ArgumentParser()
    parser.add_argument("-p", "--port", dest="port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--host", dest="host", default="127.0.0.1")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_pargs()
    app.run(debug=True, host=args.host, port=args.port)
