"""
Jinja2 templates for the PHP mapper layout.
"""

UNIT_TEMPLATE = """\
<?php

declare(strict_types=1);

namespace {{ namespace }};

{% for name in imports %}
use {{ name }};
{% endfor %}

{{ class_code }}
"""

CLASS_TEMPLATE = """\
{% if doc %}
{{ doc }}
{% endif %}
{{ signature }}
{
{% for method in methods %}
{% if not loop.first %}

{% endif %}
{{ method | indent(indent_size) }}
{% endfor %}
}
"""

METHOD_TEMPLATE = """\
{% if doc %}
{{ doc }}
{% endif %}
{{ signature }}
{
{% for statement in body %}
{{ statement | indent(indent_size) }}
{% endfor %}
}
"""

TEMPLATES = {
    "unit.php.j2": UNIT_TEMPLATE,
    "class.php.j2": CLASS_TEMPLATE,
    "method.php.j2": METHOD_TEMPLATE,
}
