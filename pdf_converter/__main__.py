"""Run the converter service: ``python -m pdf_converter``."""

import uvicorn

from pdf_converter.config import ConverterConfig, ServerConfig
from pdf_converter.logger import get_logger, setup_logging
from pdf_converter.server import create_app


def main() -> None:
    server_config = ServerConfig.from_env()
    setup_logging(server_config.log_level)

    app = create_app(config=ConverterConfig.from_env(), server_config=server_config)
    get_logger(__name__).info(
        "Starting PDF text converter",
        extra_data={"host": server_config.host, "port": server_config.port},
    )
    uvicorn.run(
        app,
        host=server_config.host,
        port=server_config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
