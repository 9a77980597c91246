"""Application wiring for poet."""

from __future__ import annotations

from typing import Optional

from poet.config import Settings
from poet.utils.observability import get_logger

from .services.analysis_service import AnalysisService
from .services.result_formatter import ResultFormatter


class PoetApp:
    """High-level facade bundling the analysis service and its presentation."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        service: Optional[AnalysisService] = None,
        formatter: Optional[ResultFormatter] = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")
        self.service = service or AnalysisService.from_settings(self.settings)
        self.formatter = formatter or ResultFormatter()
        self._logger.info(
            "Application dependencies wired",
            context={
                "dictionaries": self.service.shelf.names,
                "entries": len(self.service.shelf),
                "remote_lookups": self.service.client is not None,
            },
        )

    def lookup(self, term: str) -> str:
        return self.formatter.format_lookup(self.service.lookup(term))

    def analyze(self, text: str) -> str:
        return self.formatter.format_analysis(self.service.analyze(text))

    def create_gradio_interface(self):
        from .ui.gradio import create_interface

        return create_interface(self.service, self.formatter)

    def serve(self, *, host: str = "127.0.0.1", port: int = 7860) -> None:
        self._logger.info("Launching web server", context={"host": host, "port": port})
        interface = self.create_gradio_interface()
        interface.launch(server_name=host, server_port=port, share=self.settings.share)


__all__ = ["PoetApp"]
