from folio.cli.app import app

__all__ = ["app"]
