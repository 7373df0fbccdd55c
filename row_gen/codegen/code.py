"""Statement builder for generated Python modules."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from row_gen.codegen.types import TypeName

INDENT = "    "


@dataclass(frozen=True)
class Statement:
    """A (possibly multi-line) statement plus the types it references."""

    code: str
    types: tuple[TypeName, ...] = ()

    def lines(self) -> list[str]:
        return self.code.splitlines()

    def referenced_types(self) -> Iterator[TypeName]:
        yield from self.types


@dataclass(frozen=True)
class Assignment:
    """An annotated local: ``name: type = initializer  # comment``."""

    type_name: TypeName
    name: str
    initializer: str
    comment: str | None = None
    types: tuple[TypeName, ...] = ()

    @property
    def code(self) -> str:
        code = f"{self.name}: {self.type_name.render()} = {self.initializer}"
        if self.comment:
            code += f"  # {self.comment}"
        return code

    def lines(self) -> list[str]:
        return [self.code]

    def referenced_types(self) -> Iterator[TypeName]:
        yield self.type_name
        yield from self.types


Code = Statement | Assignment


@dataclass
class FunctionSpec:
    """A module-level function under construction."""

    name: str
    parameters: list[tuple[str, TypeName]]
    returns: TypeName
    docstring: str | None = None
    body: list[Code] = field(default_factory=list)

    def add(self, statement: Code) -> FunctionSpec:
        self.body.append(statement)
        return self

    def add_all(self, statements: Iterable[Code]) -> FunctionSpec:
        self.body.extend(statements)
        return self

    def referenced_types(self) -> Iterator[TypeName]:
        for _, type_name in self.parameters:
            yield type_name
        yield self.returns
        for statement in self.body:
            yield from statement.referenced_types()

    def render(self) -> str:
        params = ", ".join(f"{name}: {type_name.render()}" for name, type_name in self.parameters)
        lines = [f"def {self.name}({params}) -> {self.returns.render()}:"]
        if self.docstring:
            lines.append(f'{INDENT}"""{self.docstring}"""')
        for statement in self.body:
            lines.extend(INDENT + line for line in statement.lines())
        if len(lines) == 1:
            lines.append(f"{INDENT}...")
        return "\n".join(lines) + "\n"


@dataclass
class ModuleSpec:
    """A generated module: docstring, imports, top-level statements, functions."""

    docstring: str
    parts: list[Code | FunctionSpec] = field(default_factory=list)

    def add(self, part: Code | FunctionSpec) -> ModuleSpec:
        self.parts.append(part)
        return self

    def imports(self) -> dict[str, set[str]]:
        result: dict[str, set[str]] = {}
        for part in self.parts:
            for type_name in part.referenced_types():
                for module, name in type_name.imports():
                    result.setdefault(module, set()).add(name)
        return result

    def render(self) -> str:
        """Render the module as source text."""
        header = [f'"""{self.docstring}"""', "from __future__ import annotations"]
        import_lines = [
            f"from {module} import {', '.join(sorted(names))}"
            for module, names in sorted(self.imports().items())
        ]
        if import_lines:
            header.append("\n".join(import_lines))

        # Consecutive top-level statements form one block; blocks and
        # functions are separated by two blank lines.
        blocks: list[list[str]] = []
        previous_was_function = True
        for part in self.parts:
            if isinstance(part, FunctionSpec):
                blocks.append(part.render().rstrip("\n").splitlines())
                previous_was_function = True
            else:
                if previous_was_function:
                    blocks.append([])
                blocks[-1].extend(part.lines())
                previous_was_function = False

        text = "\n\n".join(header)
        for block in blocks:
            text += "\n\n\n" + "\n".join(block)
        return text + "\n"
