"""Built-in resource specifications.

- WORLD_SPEC: level/map resources stored as .umap files

Built-in specs are registered by TypeRegistry unless it is created with
``builtins=False``; configuration may register more.
"""

from maplist.core.resource import ResourceSpec


# World (map) resource specification
WORLD_SPEC = ResourceSpec(
    name="World",
    extension=".umap",
    class_path="/Script/Engine.World",
)


BUILTIN_SPECS: tuple[ResourceSpec, ...] = (WORLD_SPEC,)
