# src/fcom/cli.py
import sys
import argparse
from pathlib import Path
from typing import List, Optional

# Module imports
from fcom.config import (
    DEFAULT_COMBINE_OUTPUT,
    DEFAULT_LIST_OUTPUT,
    DEFAULT_MODE,
    DEFAULT_TREE_OUTPUT,
    OUTPUT_MODES,
)
from fcom.core.combiner import combine, write_output
from fcom.core.ignore import build_ignore_set, make_filter_config
from fcom.core.listing import create_file_list
from fcom.core.tree import render_tree
from fcom.errors import FcomError, InputError


def split_csv(value: Optional[str]) -> Optional[List[str]]:
    """'rs, toml' -> ['rs', 'toml']; None stays None."""
    if value is None:
        return None
    return [v.strip() for v in value.split(",") if v.strip()]


def _add_common_arguments(parser: argparse.ArgumentParser, default_output: str, ignore_help: str):
    parser.add_argument("folder_path", type=str, help="Path to the folder to process")
    parser.add_argument("-o", "--output", type=str, default=default_output, help=f"Name of the output file (default: {default_output})")
    parser.add_argument("-e", "--extensions", type=str, default=None, help="File extensions to include (comma-separated)")
    parser.add_argument("-i", "--ignore", type=str, default=None, help=ignore_help)


def create_arg_parser():
    parser = argparse.ArgumentParser(
        prog="fcom",
        description="A tool for combining and analyzing files in a directory.",
        epilog=(
            "Example usage:\n"
            "  fcom combine /path/to/folder -o output.txt -e rs,toml -i target -l -m markdown\n"
            "  fcom tree /path/to/folder -o tree.txt\n"
            "  fcom list /path/to/folder -o list.txt"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    combine_parser = subparsers.add_parser(
        "combine",
        help="Combine files in a folder",
        description=(
            "Combine files in a folder, with options to filter by extension, ignore certain "
            "files/folders, add line numbers, and choose output format."
        ),
    )
    _add_common_arguments(
        combine_parser, DEFAULT_COMBINE_OUTPUT,
        "Folders or files to ignore (comma-separated), added to .gitignore entries and defaults",
    )
    combine_parser.add_argument("-l", "--add-line-numbers", action="store_true", help="Add line numbers to the output")
    combine_parser.add_argument("-m", "--mode", type=str, default=DEFAULT_MODE, help=f"Output mode: {', '.join(OUTPUT_MODES)}")
    combine_parser.add_argument("--custom-output-template", type=str, default=None, help="Path to custom output template file")
    combine_parser.add_argument("--custom-file-template", type=str, default=None, help="Path to custom file template file")

    tree_parser = subparsers.add_parser("tree", help="Generate a folder tree")
    _add_common_arguments(tree_parser, DEFAULT_TREE_OUTPUT, "Folders or files to ignore (comma-separated), added to defaults")

    list_parser = subparsers.add_parser("list", help="Generate a list of files")
    _add_common_arguments(list_parser, DEFAULT_LIST_OUTPUT, "Folders or files to ignore (comma-separated), added to defaults")

    return parser


def _require_folder(folder_path: str) -> Path:
    root_dir = Path(folder_path)
    if not root_dir.is_dir():
        raise InputError(f"The folder '{root_dir}' does not exist.")
    return root_dir


def run_combine(args):
    root_dir = _require_folder(args.folder_path)
    filters = make_filter_config(
        split_csv(args.extensions),
        build_ignore_set(split_csv(args.ignore), ignore_file_dir=root_dir),
    )
    custom_output = Path(args.custom_output_template) if args.custom_output_template else None
    custom_file = Path(args.custom_file_template) if args.custom_file_template else None

    combine(
        root_dir,
        Path(args.output),
        filters,
        add_line_numbers=args.add_line_numbers,
        mode=args.mode,
        custom_output_template=custom_output,
        custom_file_template=custom_file,
    )


def run_tree(args):
    root_dir = _require_folder(args.folder_path)
    filters = make_filter_config(split_csv(args.extensions), build_ignore_set(split_csv(args.ignore)))
    tree = render_tree(root_dir, filters.extensions, filters.ignore)
    write_output(Path(args.output), tree)
    print(f"Folder tree has been generated and saved to '{args.output}'.")


def run_list(args):
    root_dir = _require_folder(args.folder_path)
    filters = make_filter_config(split_csv(args.extensions), build_ignore_set(split_csv(args.ignore)))
    file_list = create_file_list(root_dir, filters.extensions, filters.ignore)
    write_output(Path(args.output), file_list)
    print(f"File list has been generated and saved to '{args.output}'.")


COMMANDS = {
    "combine": run_combine,
    "tree": run_tree,
    "list": run_list,
}


def main(argv: Optional[List[str]] = None):
    try:
        parser = create_arg_parser()
        args = parser.parse_args(argv)
        COMMANDS[args.command](args)

    except FcomError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except Exception as e:
        print(f"An unexpected error occurred: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
