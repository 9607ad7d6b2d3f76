from enum import Enum
from os.path import dirname, join
from typing import Any, NamedTuple, Optional

from setupkit.log import get_logger
from setupkit.templates.render import Renderer

log = get_logger(__name__)


class TemplateName(str, Enum):
    """Names of the available config file templates."""

    ESLINT_CONFIG = "eslint-config"
    PRETTIER_CONFIG = "prettier-config"
    PRETTIER_IGNORE = "prettier-ignore"
    HUSKY_PRE_COMMIT = "husky-pre-commit"
    VITE_CONFIG = "vite-config"
    TSCONFIG_APP = "tsconfig-app"


class ProjectFile(NamedTuple):
    """Template source file and where it lands in the generated project."""

    source: str
    target: str
    mode: Optional[int] = None


PROJECT_FILES = {
    TemplateName.ESLINT_CONFIG: ProjectFile("eslint.config.js", "eslint.config.js"),
    TemplateName.PRETTIER_CONFIG: ProjectFile("prettierrc.json", ".prettierrc"),
    TemplateName.PRETTIER_IGNORE: ProjectFile("prettierignore", ".prettierignore"),
    TemplateName.HUSKY_PRE_COMMIT: ProjectFile("pre-commit", ".husky/pre-commit", 0o755),
    TemplateName.VITE_CONFIG: ProjectFile("vite.config.ts", "vite.config.ts"),
    TemplateName.TSCONFIG_APP: ProjectFile("tsconfig.app.json", "tsconfig.app.json"),
}


class TemplateStore:
    """
    Named config file templates written into generated projects.

    Templates live in the `tree` directory next to this module. Most of
    them are static text; the bundler and compiler configs depend on the
    selected framework.
    """

    def __init__(self, template_dir: Optional[str] = None):
        self.renderer = Renderer(template_dir or join(dirname(__file__), "tree"))

    def render(self, name: TemplateName, context: Optional[dict[str, Any]] = None) -> str:
        """
        Render a template.

        :param name: Template to render.
        :param context: Template variables (`framework` for the bundler and compiler configs).
        :return: File contents.
        """
        project_file = PROJECT_FILES[name]
        log.debug(f"Rendering template {name.value} from {project_file.source}")
        return self.renderer.render_template(project_file.source, context or {})


__all__ = ["TemplateName", "ProjectFile", "PROJECT_FILES", "TemplateStore"]
