# storefront/config.py
import logging
import os
from pathlib import Path

from pydantic import BaseModel
from rich.logging import RichHandler


class Settings(BaseModel):
    data_dir: Path = Path("data")
    products_file: str = "products.json"
    carts_file: str = "carts.json"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def carts_path(self) -> Path:
        return self.data_dir / self.carts_file

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(os.getenv("STOREFRONT_DATA_DIR", "data")),
            products_file=os.getenv("STOREFRONT_PRODUCTS_FILE", "products.json"),
            carts_file=os.getenv("STOREFRONT_CARTS_FILE", "carts.json"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", 8080)),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO"):
    # basicConfig is a no-op once the root logger has handlers (uvicorn, pytest)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
