# select_sdk/frontend/templating.py
import logging
import os
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from starlette.templating import Jinja2Templates

SDK_TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

logger = logging.getLogger("select_sdk.frontend.templating")

# Инициализируется один раз при старте приложения
templates: Optional[Jinja2Templates] = None


def setup_jinja_env(template_dirs: List[str]) -> Environment:
    """
    Окружение Jinja2 с несколькими директориями шаблонов.
    Директории в начале списка имеют приоритет (переопределение шаблонов SDK сервисом).
    """
    if not template_dirs:
        raise ValueError("At least one template directory must be provided.")

    logger.debug(f"Setting up Jinja2 environment with loaders for: {template_dirs}")
    env = Environment(
        loader=FileSystemLoader(template_dirs),
        autoescape=select_autoescape(["html", "xml"]),
        enable_async=False,
    )
    return env


def initialize_templates(service_template_dir: Optional[str] = None) -> Jinja2Templates:
    """
    Инициализирует глобальный объект `templates`.

    :param service_template_dir: Директория шаблонов сервиса, переопределяющих шаблоны SDK.
    """
    global templates
    if templates is not None:
        logger.warning("Templates already initialized. Skipping re-initialization.")
        return templates

    search_paths = [SDK_TEMPLATES_DIR]
    if service_template_dir:
        if os.path.isdir(service_template_dir):
            search_paths.insert(0, service_template_dir)
        else:
            logger.warning(
                f"Service template directory '{service_template_dir}' not found. Only SDK templates will be available."
            )

    try:
        templates = Jinja2Templates(env=setup_jinja_env(search_paths))
        logger.info("Global Jinja2Templates instance initialized.")
    except Exception as e:
        logger.critical("Failed to initialize Jinja2Templates.", exc_info=True)
        raise RuntimeError("Failed to initialize templates") from e
    return templates


def get_templates() -> Jinja2Templates:
    if templates is None:
        logger.debug("Templates accessed before initialization, using SDK templates only.")
        return initialize_templates()
    return templates


def reset_templates() -> None:
    global templates
    templates = None
