"""
Jinja2 templates for the Python mapper layout.

Statements and expressions are rendered in ``renderer.py``; these
templates only arrange the module, class and method frames.
"""

UNIT_TEMPLATE = '''\
"""
{% for line in header %}
{{ line }}
{% endfor %}
"""

{% for line in imports %}
{{ line }}
{% endfor %}


{{ class_code }}
'''

CLASS_TEMPLATE = """\
class {{ name }}{% if extends %}({{ extends }}){% endif %}:
{% if doc %}
{{ doc | indent(indent_size) }}
{% endif %}
{% for method in methods %}

{{ method | indent(indent_size) }}
{% endfor %}
"""

METHOD_TEMPLATE = """\
def {{ name }}({{ params | join(", ") }}){% if return_type %} -> {{ return_type }}{% endif %}:
{% if doc %}
{{ doc | indent(indent_size) }}
{% endif %}
{{ body | indent(indent_size) }}
"""

TEMPLATES = {
    "unit.py.j2": UNIT_TEMPLATE,
    "class.py.j2": CLASS_TEMPLATE,
    "method.py.j2": METHOD_TEMPLATE,
}
