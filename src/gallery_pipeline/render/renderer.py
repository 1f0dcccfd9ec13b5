"""Jinja2 renderer for the gallery index page."""

from importlib import resources
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, PackageLoader, TemplateError, select_autoescape

from ..core.exceptions import GalleryPipelineError

INDEX_TEMPLATE = "index.html.j2"
STATIC_DIR = "static"


class JinjaTemplateRenderer:
    """Renders the packaged index template and ships its static assets."""

    def __init__(self, template_name: str = INDEX_TEMPLATE):
        self._env = Environment(
            loader=PackageLoader("gallery_pipeline", "templates"),
            autoescape=select_autoescape(["html", "j2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._template_name = template_name

    def render(self, context: Dict[str, Any]) -> bytes:
        """Render the index page as UTF-8 bytes."""
        try:
            template = self._env.get_template(self._template_name)
            return template.render(**context).encode("utf-8")
        except TemplateError as exc:
            raise GalleryPipelineError(f"Could not render {self._template_name}: {exc}") from exc

    def copy_static_assets(self, output_dir: Path) -> None:
        """Copy the packaged stylesheet and script to ``{output_dir}/static``."""
        target = Path(output_dir) / STATIC_DIR
        target.mkdir(parents=True, exist_ok=True)
        source = resources.files("gallery_pipeline").joinpath(STATIC_DIR)
        for asset in source.iterdir():
            if asset.is_file():
                (target / asset.name).write_bytes(asset.read_bytes())
