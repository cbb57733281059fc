"""
Project-level artifacts rendered next to the class files.

A README summarising the document and the generated classes, and a
dependency manifest for the target language. Both are Jinja2 templates
fed from the class model; the document is only read for servers,
channels and security schemes.
"""

from __future__ import annotations

import logging
import re

from ..utils import lower_case_first, upper_case_first
from .analyzer.class_model import ClassModel, TypeRef
from .backends.base import ClassRenderer
from .config import CodeGeneratorConfig
from .document import AsyncApiDocument

logger = logging.getLogger(__name__)

AMQP_PROTOCOL = "amqp"
AMQP_PROTOCOL_VERSION = "0.9.1"
USER_PASSWORD_SECURITY_SCHEME_TYPE = "userPassword"


def build_channel_class_name_prefix(channel_name: str) -> str:
    """Class name prefix for a channel, e.g. "user/{id}/signed-up" -> "UserIdSignedUp"."""
    tokens = re.sub(r"[/<>{}\-]", " ", channel_name).split(" ")
    return "".join(upper_case_first(token) for token in tokens if token)


def class_instance_variable_name(class_name: str) -> str:
    return "$" + lower_case_first(class_name)


def build_project_context(document: AsyncApiDocument, model: ClassModel, renderer: ClassRenderer, config: CodeGeneratorConfig) -> dict:
    """Template variables shared by every project template."""
    server = None
    server_security_schemes = []
    server_name = config.server or next(iter(document.servers()), "")
    if server_name:
        server = document.server(server_name)
        server_security_schemes = document.server_security_schemes(server_name)

    classes = []
    for class_def in model:
        classes.append(
            {
                "name": class_def.name,
                "namespace": renderer.get_namespace(class_def.type),
                "super_class": class_def.super_class.name if class_def.super_class else None,
                "discriminator": class_def.discriminator_name,
                "subclasses": [subclass.type.name for subclass in class_def.subclasses],
                "fields": [variable.name for variable in class_def.own_instance_variables],
            }
        )

    return {
        "CONSTANTS": {
            "AMQP_PROTOCOL": AMQP_PROTOCOL,
            "AMQP_PROTOCOL_VERSION": AMQP_PROTOCOL_VERSION,
            "USER_PASSWORD_SECURITY_SCHEME_TYPE": USER_PASSWORD_SECURITY_SCHEME_TYPE,
        },
        "app_title": document.title,
        "app_version": document.version,
        "app_description": document.description,
        "server": server,
        "server_security_schemes": server_security_schemes,
        "channels": list(document.channels().values()),
        "classes": classes,
        "models_namespace": renderer.get_namespace(TypeRef(name="", package_name=config.models_namespace)),
        "services_namespace": renderer.get_namespace(TypeRef(name="", package_name=config.services_namespace)),
        "source_dir": renderer.SOURCE_DIR,
        "language": renderer.LANGUAGE,
        "build_channel_class_name_prefix": build_channel_class_name_prefix,
        "class_instance_variable_name": class_instance_variable_name,
    }


def render_project_artifacts(document: AsyncApiDocument, model: ClassModel, renderer: ClassRenderer, config: CodeGeneratorConfig) -> dict[str, str]:
    """
    Render the renderer's project templates.

    Returns:
        Mapping of relative path -> content
    """
    context = build_project_context(document, model, renderer, config)
    artifacts = {}
    for path, template_name in renderer.PROJECT_TEMPLATES.items():
        artifacts[path] = renderer.get_project_template(template_name).render(context)
        logger.debug("Rendered project artifact %s", path)
    return artifacts
