from fasthtml.common import serve

from blockcount.adapters.fasthtml import create_app
from blockcount.config import configure_logging, get_config

config = get_config()
configure_logging(config.logging)

app, board = create_app(config)


if __name__ == "__main__":
    print("\n" + "="*60)
    print(f"🏸 {config.web.title} starting on http://{config.web.host}:{config.web.port}")
    print("="*60)

    serve(host=config.web.host, port=config.web.port, reload=config.web.reload)
