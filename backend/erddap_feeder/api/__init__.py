"""HTTP interface of the ERDDAP feeder."""

from erddap_feeder.api.routes import router

__all__ = ["router"]
