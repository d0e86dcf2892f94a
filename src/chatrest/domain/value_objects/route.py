"""REST routes - method plus path template."""

from dataclasses import dataclass
from string import Formatter


@dataclass(frozen=True)
class CompiledRoute:
    """Route with every path parameter filled in."""

    method: str
    path: str
    template: str
    params: tuple[str, ...] = ()

    @property
    def major_parameter(self) -> str:
        """First path parameter; rate limits are tracked per value of it."""
        return self.params[0] if self.params else ""


@dataclass(frozen=True)
class Route:
    """HTTP method and path template with named parameters."""

    method: str
    template: str

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(
            name for _, name, _, _ in Formatter().parse(self.template) if name
        )

    def compile(self, *params: object) -> CompiledRoute:
        """Fill the template positionally, e.g. compile(channel_id, subject_id)."""
        names = self.param_names
        if len(params) != len(names):
            raise ValueError(
                f"Route {self.template} expects {len(names)} parameters, got {len(params)}"
            )
        values = tuple(str(v) for v in params)
        path = self.template.format(**dict(zip(names, values)))
        return CompiledRoute(
            method=self.method, path=path, template=self.template, params=values
        )


class Routes:
    """Routes used by this client."""

    CREATE_PERM_OVERRIDE = Route("PUT", "/channels/{channel_id}/permissions/{subject_id}")
    MODIFY_PERM_OVERRIDE = Route("PUT", "/channels/{channel_id}/permissions/{subject_id}")
    DELETE_PERM_OVERRIDE = Route("DELETE", "/channels/{channel_id}/permissions/{subject_id}")
