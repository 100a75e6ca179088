import argparse

from vyom.config import config
from vyom.logging_config import configure_logging

# service name -> (ASGI app path, port)
SERVICES = {
    "gateway": ("vyom.services.gateway:app", config.GATEWAY_PORT),
    "auth": ("vyom.services.auth:app", config.AUTH_PORT),
    "wardrobe": ("vyom.services.wardrobe:app", config.WARDROBE_PORT),
    "outfit": ("vyom.services.outfits:app", config.OUTFIT_PORT),
    "profile": ("vyom.services.profile:app", config.PROFILE_PORT),
}


def run(service: str, host: str = None, port: int = None):
    import uvicorn

    configure_logging()
    app_path, default_port = SERVICES[service]
    uvicorn.run(
        app_path,
        host=host or config.HOST_URL,
        port=port or default_port,
        log_level=config.LOG_LEVEL.lower(),
    )


def main(argv=None):
    parser = argparse.ArgumentParser(prog="vyom", description="Run one of the Vyom platform services")
    parser.add_argument("service", choices=sorted(SERVICES))
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    args = parser.parse_args(argv)
    run(args.service, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
