"""
PlantUML server client for validating and rendering diagrams.
"""

import zlib
import base64
import logging

import requests

from text2uml.core.errors import LayoutEngineMissingError, RenderError
from text2uml.core.extractor import END_SENTINEL, START_SENTINEL
from text2uml.core.models import PlantUMLResult

logger = logging.getLogger(__name__)

PNG_MAGIC = b'\x89PNG'
LAYOUT_ENGINE_MARKERS = ("graphviz", "dot executable", "cannot find dot", "dot.exe")


class PlantUMLTool:
    """
    Tool for validating and rendering PlantUML diagrams.

    This class interfaces with a PlantUML server to check syntax,
    render PNG images and generate diagram URLs.
    """

    def __init__(self, host: str = "http://localhost:8080", timeout: int = 15):
        """
        Initialize PlantUML tool.

        Args:
            host: PlantUML server host URL
            timeout: Request timeout in seconds
        """
        self.host = host.rstrip("/")
        self.timeout = timeout
        logger.info(f"PlantUML tool initialized with host: {self.host}")

    def _encode_plantuml(self, plantuml_code: str) -> str:
        """
        Encode PlantUML code for URL.

        Args:
            plantuml_code: Raw PlantUML code

        Returns:
            URL-safe encoded string
        """
        code = plantuml_code.strip()

        if not code.startswith(START_SENTINEL):
            code = f"{START_SENTINEL}\n{code}"
        if not code.endswith(END_SENTINEL):
            code = f"{code}\n{END_SENTINEL}"

        compressed = zlib.compress(code.encode('utf-8'))[2:-4]
        encoded = base64.b64encode(compressed).translate(
            bytes.maketrans(
                b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/",
                b"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_"
            )
        ).decode('utf-8')

        return encoded

    def get_diagram_url(self, plantuml_code: str, format: str = "png") -> str:
        """
        Generate a viewable URL for the PlantUML diagram.

        Args:
            plantuml_code: PlantUML diagram code
            format: Output format (png, svg, etc.)

        Returns:
            URL to view the diagram
        """
        encoded = self._encode_plantuml(plantuml_code)
        return f"{self.host}/{format}/{encoded}"

    def _error_text(self, encoded: str) -> str:
        response = requests.get(f"{self.host}/txt/{encoded}", timeout=self.timeout)
        return response.text.strip()

    def render_png(self, plantuml_code: str) -> bytes:
        """
        Render PlantUML code to a PNG image.

        Args:
            plantuml_code: PlantUML diagram code

        Returns:
            PNG bytes

        Raises:
            LayoutEngineMissingError: If the server has no Graphviz installation
            RenderError: On syntax errors or connection failures
        """
        logger.info("Rendering PlantUML diagram to PNG")
        encoded = self._encode_plantuml(plantuml_code)

        try:
            response = requests.get(f"{self.host}/png/{encoded}", timeout=self.timeout)
            if response.status_code == 200 and response.content[:4] == PNG_MAGIC:
                logger.info(f"Rendered PNG ({len(response.content)} bytes)")
                return response.content

            logger.warning("PNG rendering failed. Fetching detailed error...")
            detailed_error = self._error_text(encoded)
        except requests.exceptions.RequestException as e:
            error_msg = f"PlantUML Server Connection Error: {str(e)}"
            logger.error(error_msg)
            raise RenderError(error_msg) from e

        lowered = detailed_error.lower()
        if any(marker in lowered for marker in LAYOUT_ENGINE_MARKERS):
            logger.error("PlantUML server cannot find its Graphviz layout engine")
            raise LayoutEngineMissingError(
                f"PlantUML server is missing the Graphviz layout engine:\n{detailed_error}"
            )

        error_msg = f"PlantUML Render Error (HTTP {response.status_code}):\n{detailed_error}"
        logger.error(error_msg)
        raise RenderError(error_msg)

    def check_syntax(self, plantuml_code: str) -> PlantUMLResult:
        """
        Validate PlantUML syntax with detailed error extraction.

        Args:
            plantuml_code: PlantUML code to validate

        Returns:
            PlantUMLResult with validation status and detailed error if applicable.
        """
        logger.info("Validating PlantUML syntax")

        try:
            self.render_png(plantuml_code)
        except RenderError as e:
            return PlantUMLResult(is_valid=False, error=str(e))

        return PlantUMLResult(
            is_valid=True,
            url=self.get_diagram_url(plantuml_code, "png"),
            svg_url=self.get_diagram_url(plantuml_code, "svg"),
        )
