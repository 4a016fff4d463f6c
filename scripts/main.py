import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from argparse import ArgumentParser, Namespace
from dotenv import load_dotenv
from os import getenv

from text2uml.config import ensure_output_dirs, DOTENV
from text2uml.core.models import PipelineMode
from text2uml.core.utils import load_input_text
from text2uml.pipeline.main import main as run_pipeline_main
from text2uml.core.logger import Logger

def define_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Turn a free-form design description into a PlantUML class diagram")
    parser.add_argument("--mode", choices=[PipelineMode.STRUCTURED, PipelineMode.DIRECT, PipelineMode.DOCUMENT], required=False, help="structured (JSON model), direct (PlantUML answer) or document (requirements document)", default=PipelineMode.STRUCTURED)
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", help="Path to a text file with the design description")
    source.add_argument("--text", help="Design description given inline")
    parser.add_argument("--render", action="store_true", help="Render the diagram to PNG through the PlantUML server")
    parser.add_argument("--check", action="store_true", help="Validate the diagram syntax against the PlantUML server")
    return parser


def retrieve_args() -> Namespace:
    parser = define_parser()
    return parser.parse_args()


def main():
    load_dotenv(dotenv_path=DOTENV)
    ensure_output_dirs()

    args = retrieve_args()
    openrouter_api_key = getenv("OPENROUTER_API_KEY", "")

    if args.input:
        text = load_input_text(args.input)
        run_name = Path(args.input).stem
    else:
        text = args.text
        run_name = "inline"

    output_file = run_pipeline_main(
        api_key=openrouter_api_key,
        mode=args.mode,
        text=text,
        run_name=run_name,
        render=args.render,
        check=args.check,
    )

    if output_file is None:
        sys.exit(1)
    Logger.log_info(f"Completed! Output: {output_file}")


if __name__ == "__main__":
    main()
