"""Argument planner: splits a method's fields into required parameters and
the optional-arguments aggregate."""

from dataclasses import dataclass

from api_bindgen.generator.resolver import ResolvedType, Resolver
from api_bindgen.schema.base import Field, MethodDescription


@dataclass(frozen=True)
class Param:
    """One method field together with its resolved type and identifiers."""

    field: Field
    resolved: ResolvedType
    name: str  # parameter name, or attribute name on the aggregate

    @property
    def required(self) -> bool:
        return self.field.required

    @property
    def expr(self) -> str:
        """Expression reading the value inside the generated function."""
        return self.name if self.required else f"opts.{self.name}"


@dataclass(frozen=True)
class ArgumentPlan:
    params: tuple[Param, ...]  # every field, declaration order
    opts_name: str | None = None
    opts_source: str = ""

    @property
    def required(self) -> list[Param]:
        return [p for p in self.params if p.required]

    @property
    def optional(self) -> list[Param]:
        return [p for p in self.params if not p.required]

    def signature(self) -> str:
        """Parameter list following ``transport``."""
        args = ["transport: Transport"]
        args.extend(f"{p.name}: {p.resolved.annotation}" for p in self.required)
        if self.opts_name:
            args.append(f"opts: {self.opts_name} | None = None")
        return ", ".join(args)


def plan_arguments(method_name: str, method: MethodDescription, resolver: Resolver) -> ArgumentPlan:
    """Resolve every field and synthesise the aggregate when needed.

    Raises UnresolvableTypeError for the first field that cannot be resolved.
    """
    params = []
    for f in method.fields:
        resolved = resolver.resolve_field(f)
        name = resolver.param_name(f.name) if f.required else resolver.attr_name(f.name)
        params.append(Param(field=f, resolved=resolved, name=name))

    plan = ArgumentPlan(params=tuple(params))
    if not plan.optional:
        return plan

    opts_name = resolver.opts_name(method_name)
    return ArgumentPlan(
        params=plan.params,
        opts_name=opts_name,
        opts_source=_render_aggregate(opts_name, resolver.function_name(method_name), plan.optional),
    )


def _render_aggregate(opts_name: str, function_name: str, optional: list[Param]) -> str:
    lines = [
        "@dataclass",
        f"class {opts_name}:",
        f'    """Optional parameters for {function_name}."""',
    ]
    for p in optional:
        lines.append("")
        for comment in p.field.description.splitlines():
            lines.append(f"    # {comment}".rstrip())
        lines.append(f"    {p.name}: {p.resolved.annotation} | None = None")
    return "\n".join(lines) + "\n"
