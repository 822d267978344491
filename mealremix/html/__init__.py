from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape


def environment(html_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(html_dir),
        autoescape=select_autoescape(),
    )
