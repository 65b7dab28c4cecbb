import logging
import os
import socket

from waitlist_admin.logging_config import configure_logging
from waitlist_admin.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger(__name__)

app = create_dash_app(os.getenv("WAITLIST_ADMIN_CONFIG_ROOT", "config"))
server = app.server


def _port_in_use(port: int, host: str = "localhost") -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        return sock.connect_ex((host, port)) == 0


def pick_port(preferred: int, attempts: int = 100) -> int:
    """First free port in ``[preferred, preferred + attempts)``; ``preferred`` if none is."""
    return next(
        (port for port in range(preferred, preferred + attempts) if not _port_in_use(port)),
        preferred,
    )


def main() -> None:
    preferred = int(os.getenv("PORT", "8051"))
    port = pick_port(preferred)
    if port != preferred:
        logger.warning("Port %d was taken. Starting on %d", preferred, port)

    app.run(host="0.0.0.0", port=port, debug=os.getenv("DEBUG", "0") == "1")


if __name__ == "__main__":
    main()
