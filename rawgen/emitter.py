"""
Code emitter

Renders a GenerationPlan as Python source. Each piece is its own jinja2
template; pieces are concatenated in order so the exported type comes
before the methods written into its body.
"""

from typing import List, Sequence

from jinja2 import Environment, StrictUndefined

from .planner import GenerationPlan
from .rawtypes import Strategy

BEGIN_MARKER = "# raw:codegen:begin"
END_MARKER = "# raw:codegen:end"

HEADER = f"""{BEGIN_MARKER}

#
# DO NOT CHANGE
# This section has been generated by rawgen.
#
"""

TYPE_TEMPLATE = """\
@raw.dataclass
class {{ p.exported_name }}:
{% for f in p.fields %}
    {{ f.exported_name }}: {{ f.raw_type.external }} = {{ f.raw_type.default }}
{% endfor %}
"""

ENCODE_TEMPLATE = """\
    def encode(self) -> bytes:
        r = {{ p.name }}()
        b = bytearray({{ p.view_name }}.size)
{% for f in p.fields %}
{% set s = f.strategy.value %}
{% if s == "numeric-cast" %}
        r.{{ f.name }} = {{ f.raw_type.cast }}(self.{{ f.exported_name }})
{% elif s == "time-nanos" %}
        r.{{ f.name }} = raw.Time.from_datetime(self.{{ f.exported_name }})
{% elif s == "duration-cast" %}
        r.{{ f.name }} = raw.Duration.from_timedelta(self.{{ f.exported_name }})
{% elif s == "string-region" %}
        r.{{ f.name }} = raw.String()
        r.{{ f.name }}.encode(self.{{ f.exported_name }}, b)
{% else %}
        r.{{ f.name }} = self.{{ f.exported_name }}
{% endif %}
{% endfor %}
        {{ p.view_name }}.pack(b, {{ pack_args | join(", ") }})
        return bytes(b)
"""

DECODE_TEMPLATE = """\
    def decode(self, b) -> "{{ p.exported_name }}":
        r = {{ p.view_name }}(b)
{% for f in p.fields %}
        self.{{ f.exported_name }} = r.{{ f.exported_name }}()
{% endfor %}
        return self
"""

ACCESSORS_TEMPLATE = """\
class {{ p.view_name }}(raw.View):
    __slots__ = ()
    layout = "{{ p.layout }}"
{% for f in p.fields %}
{% set s = f.strategy.value %}

    def {{ f.exported_name }}(self) -> {{ f.raw_type.external }}:
{% if s == "time-nanos" %}
        return raw.Time(self.read("{{ f.raw_type.fmt }}", {{ f.offset }})).datetime()
{% elif s == "duration-cast" %}
        return raw.Duration(self.read("{{ f.raw_type.fmt }}", {{ f.offset }})).timedelta()
{% elif s == "string-region" %}
        return self.descriptor({{ f.offset }}).value(self.window())

    def {{ f.exported_name }}Bytes(self) -> bytes:
        return self.descriptor({{ f.offset }}).raw_bytes(self.window())
{% else %}
        return self.read("{{ f.raw_type.fmt }}", {{ f.offset }})
{% endif %}
{% endfor %}
"""


def pack_args(p: GenerationPlan) -> List[str]:
    """Values packed into the fixed region, in layout order."""
    args = []
    for f in p.fields:
        if f.strategy is Strategy.STRING_REGION:
            args += [f"r.{f.name}.offset", f"r.{f.name}.length"]
        else:
            args.append(f"r.{f.name}")
    return args


class CodeEmitter:
    """Renders exported types, codecs and accessors for raw records"""

    def __init__(self):
        self.env = Environment(
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.type_template = self.env.from_string(TYPE_TEMPLATE)
        self.encode_template = self.env.from_string(ENCODE_TEMPLATE)
        self.decode_template = self.env.from_string(DECODE_TEMPLATE)
        self.accessors_template = self.env.from_string(ACCESSORS_TEMPLATE)

    def render_type(self, p: GenerationPlan) -> str:
        return self.type_template.render(p=p)

    def render_encode(self, p: GenerationPlan) -> str:
        return self.encode_template.render(p=p, pack_args=pack_args(p))

    def render_decode(self, p: GenerationPlan) -> str:
        return self.decode_template.render(p=p)

    def render_accessors(self, p: GenerationPlan) -> str:
        return self.accessors_template.render(p=p)

    def emit(self, p: GenerationPlan) -> str:
        return "\n".join([
            self.render_type(p),
            self.render_encode(p),
            self.render_decode(p) + "\n",
            self.render_accessors(p),
        ])

    def emit_block(self, plans: Sequence[GenerationPlan]) -> str:
        """Wrap the code of every plan in a single generated block."""
        body = "\n\n\n".join(self.emit(p).rstrip("\n") for p in plans)
        return f"{HEADER}\nfrom rawgen import raw\n\n\n{body}\n\n\n{END_MARKER}\n"
