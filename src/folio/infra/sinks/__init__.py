from folio.infra.sinks.html import HtmlSiteSink

__all__ = ["HtmlSiteSink"]
