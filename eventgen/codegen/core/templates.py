"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering with the
built-in templates used to compose generated members and files.
"""

from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateNotFound
from jinja2.exceptions import TemplateError as JinjaTemplateError


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(self, templates: Optional[Dict[str, str]] = None):
        """
        Initialize template engine.

        Args:
            templates: In-memory templates keyed by name
        """
        self._env = Environment(
            loader=DictLoader(dict(templates or {})),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

        # Add custom filters for code generation
        self._env.filters["doc_comment"] = self._doc_comment_filter

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of a registered template
            context: Variables to pass to template

        Returns:
            Rendered template content
        """
        try:
            template = self._env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """
        Add an in-memory template.

        Args:
            name: Template name
            content: Template content
        """
        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        """Check if a template is registered."""
        try:
            self._env.get_template(template_name)
        except TemplateNotFound:
            return False
        return True

    # Template filters for code generation

    def _doc_comment_filter(self, value: str, spaces: int = 8) -> str:
        """Wrap text in an XML ``<summary>`` doc comment."""
        indent = " " * spaces
        lines = ["<summary>", *str(value).splitlines(), "</summary>"]
        return "\n".join(f"{indent}/// {line}".rstrip() for line in lines)


# Built-in templates, one per fragment kind plus the file scaffolding

PROPERTY_TEMPLATE = """\
{% if summary %}
{{ summary | doc_comment(8) }}
{% endif %}
        public {% if is_virtual %}virtual {% endif %}{{ type }} {{ name }}
        {
            get => this.{{ field_name }};
            set
            {
                this.{{ field_name }} = value;
                this.{{ method_name }}(value);
            }
        }

"""

EVENT_TEMPLATE = """\
{% if summary %}
{{ summary | doc_comment(8) }}
{% endif %}
        public event System.EventHandler{% if args_type %}<{{ args_type }}>{% endif %} {{ name }};
"""

METHOD_TEMPLATE = """\
{% if summary %}
{{ summary | doc_comment(8) }}
{% endif %}
        {{ modifiers }} void {{ name }}({{ type }} value) => \
this.{{ event_name }}?.Invoke(this, \
{% if args_type %}new {{ args_type }}(value){% else %}System.EventArgs.Empty{% endif %});
"""

EVENT_ARGS_TEMPLATE = """\
{% if summary %}
{{ summary | doc_comment(4) }}
{% endif %}
    public sealed class {{ name }} : System.EventArgs
    {
        public {{ type }} Value { get; }
        internal {{ name }}({{ type }} value) => this.Value = value;
    }

"""

CLASS_FILE_TEMPLATE = """\
{{ header }}

// {{ title }}

namespace {{ namespace }}
{
{% if class_declaration %}
    {{ class_declaration }}
    {
{{ body }}    }
{% else %}
{{ body }}{% endif %}
}
"""

ATTRIBUTE_TEMPLATE = """\
//
// Auto Generate By EventGen;
//

using System;

namespace {{ namespace }}
{
    [AttributeUsage(AttributeTargets.Field, Inherited = false, AllowMultiple = false)]
    [System.Diagnostics.Conditional("EventAttribute_DEBUG")]
    public sealed class EventAttribute : Attribute
    {
        public EventAttribute() { }
{% for group in groups %}

{% for prop in group %}
        public {{ prop.type }} {{ prop.key }} { get; set; }{{ prop.initializer }}
{% endfor %}
{% endfor %}
    }
}
"""

BUILTIN_TEMPLATES = {
    "property.cs.j2": PROPERTY_TEMPLATE,
    "event.cs.j2": EVENT_TEMPLATE,
    "method.cs.j2": METHOD_TEMPLATE,
    "event_args.cs.j2": EVENT_ARGS_TEMPLATE,
    "class_file.cs.j2": CLASS_FILE_TEMPLATE,
    "attribute.cs.j2": ATTRIBUTE_TEMPLATE,
}


def create_template_engine(templates: Optional[Dict[str, str]] = None) -> TemplateEngine:
    """
    Create a template engine preloaded with the built-in templates.

    Args:
        templates: Extra or replacement templates keyed by name

    Returns:
        Configured template engine
    """
    return TemplateEngine({**BUILTIN_TEMPLATES, **(templates or {})})


# Default template engine instance
_default_engine = None


def get_default_template_engine() -> TemplateEngine:
    """Get the default template engine instance."""
    global _default_engine
    if _default_engine is None:
        _default_engine = create_template_engine()
    return _default_engine
