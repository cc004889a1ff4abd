"""Method emitter: one Python function (and its options dataclass) per API method."""

from dataclasses import dataclass

from api_bindgen.generator.encoding import encode_fields, indent, quote
from api_bindgen.generator.planner import plan_arguments
from api_bindgen.generator.resolver import ResolvedReturn, Resolver
from api_bindgen.schema.base import MethodDescription


@dataclass(frozen=True)
class EmittedMethod:
    name: str  # schema method name
    function_name: str
    source: str
    multipart: bool
    returns: ResolvedReturn


def emit_method(method_name: str, method: MethodDescription, resolver: Resolver) -> EmittedMethod:
    """Emit the source for *method*.

    Raises UnresolvableTypeError when a field or the return type has no
    representation.
    """
    returns = resolver.resolve_return(method)
    plan = plan_arguments(method_name, method, resolver)
    encoded = encode_fields(method_name, plan.params)
    function_name = resolver.function_name(method_name)

    body = [*_docstring(method)]
    if plan.opts_name:
        body += [
            "if opts is None:",
            f"    opts = {plan.opts_name}()",
        ]
    body.append("form: dict[str, str] = {}")
    if encoded.multipart:
        body.append("files: dict[str, NamedReader] = {}")
    body.extend(encoded.lines)
    body.append("")
    if encoded.multipart:
        body.append(f"raw = transport.post({quote(method_name)}, form, files)")
    else:
        body.append(f"raw = transport.get({quote(method_name)}, form)")
    body.append(f"return decode_result(raw, {returns.target}, {returns.zero_value})")

    parts = []
    if plan.opts_source:
        parts += ["", "", plan.opts_source.rstrip("\n")]
    parts += [
        "",
        "",
        f"def {function_name}({plan.signature()}) -> {returns.annotation}:",
        *indent(body),
    ]
    return EmittedMethod(
        name=method_name,
        function_name=function_name,
        source="\n".join(parts) + "\n",
        multipart=encoded.multipart,
        returns=returns,
    )


def _docstring(method: MethodDescription) -> list[str]:
    text = [_escape(line) for line in method.description]
    if method.href:
        if text:
            text.append("")
        text.append(_escape(method.href))
    if not text:
        return []
    if len(text) == 1:
        return [f'"""{text[0]}"""']
    return [f'"""{text[0]}', *text[1:], '"""']


def _escape(line: str) -> str:
    line = line.replace("\\", "\\\\").rstrip()
    if line.endswith('"'):
        line = line[:-1] + '\\"'
    return line.replace('"""', '\\"\\"\\"')
