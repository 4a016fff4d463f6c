import logging

from typing import Iterable

from text2uml.core.models import DiagramModel


logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

class Logger:
    @staticmethod
    def log_info(line: str) -> None:
        logger.info(line)


    @staticmethod
    def log_error(line: str) -> None:
        logger.error(line)


    @staticmethod
    def log_warning(line: str) -> None:
        logger.warning(line)


    @staticmethod
    def log_debug(line: str) -> None:
        logger.debug(line)


    @staticmethod
    def log_title(title: str) -> None:
        logger.info("="*60)
        logger.info(title)
        logger.info("="*60)


    @staticmethod
    def log_diagram(diagram_url: str, diagram: str) -> None:
        logger.info(f"Diagram URL: {diagram_url}")
        logger.info("Generated Diagram:")
        logger.info(diagram)


    @staticmethod
    def log_model(model: DiagramModel) -> None:
        logger.info(f"Parsed {len(model.classes)} classes")
        logger.info(f"Parsed classes: {[cls.name for cls in model.classes]}")
        logger.info(f"Parsed {len(model.relationships)} relationships")


    @staticmethod
    def log_unresolved(names: Iterable[str]) -> None:
        names = sorted(names)
        if names:
            logger.debug(f"Relationship endpoints without a declared class: {names}")


    @staticmethod
    def log_run_start(run_name: str, text: str) -> None:
        Logger.log_title(f"RUNNING: {run_name}")
        logger.info(f"Input preview: {text[:200]}...")


    @staticmethod
    def log_run_output(state: dict) -> None:
        Logger.log_title("RUN COMPLETED")
        logger.info(f"PlantUML lines: {len((state.get('plantuml') or '').splitlines())}")
        logger.info(f"Image rendered: {state.get('image') is not None}")


    @staticmethod
    def log_models(first_model: str, second_model: str = None) -> None:
        if second_model:
            logger.info("Using models:")
            logger.info(f"  Design model:   {first_model}")
            logger.info(f"  Document model: {second_model}")
        else:
            logger.info(f"Using model: {first_model}")
