"""
Static WASI classification tables.

Maps each recognized WASI namespace to the capability category of every
function it defines. The tables are built once at import time and are
read-only afterwards.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from ..formats.wasm_structures import ExternalKind
from .categories import CapabilityCategory

WASI_SNAPSHOT_PREVIEW1 = "wasi_snapshot_preview1"
WASI_UNSTABLE = "wasi_unstable"


@dataclass(frozen=True)
class NamespaceTable:
    """Field name to capability lookup for one WASI namespace."""
    name: str
    functions: Mapping[str, CapabilityCategory]
    prefixes: Tuple[Tuple[str, CapabilityCategory], ...] = ()

    def lookup(self, field_name: str, kind: ExternalKind = ExternalKind.FUNCTION) -> Optional[CapabilityCategory]:
        """
        Resolve a field to its capability category.

        Args:
            field_name: Import field name
            kind: External kind of the import

        Returns:
            The category, or None if this namespace does not define the field
        """
        if kind == ExternalKind.MEMORY:
            return CapabilityCategory.MEMORY

        category = self.functions.get(field_name)
        if category is not None:
            return category

        for prefix, prefix_category in self.prefixes:
            if field_name.startswith(prefix):
                return prefix_category
        return None


def _group(category: CapabilityCategory, names: Iterable[str]) -> Dict[str, CapabilityCategory]:
    return {name: category for name in names}


_FILESYSTEM = (
    "fd_advise", "fd_allocate", "fd_close", "fd_datasync",
    "fd_fdstat_get", "fd_fdstat_set_flags", "fd_fdstat_set_rights",
    "fd_filestat_get", "fd_filestat_set_size", "fd_filestat_set_times",
    "fd_pread", "fd_prestat_get", "fd_prestat_dir_name", "fd_pwrite",
    "fd_read", "fd_readdir", "fd_renumber", "fd_seek", "fd_sync",
    "fd_tell", "fd_write",
    "path_create_directory", "path_filestat_get", "path_filestat_set_times",
    "path_link", "path_open", "path_readlink", "path_remove_directory",
    "path_rename", "path_symlink", "path_unlink_file",
)

# Shared by both snapshots. sock_accept, new in preview1, falls under the
# sock_ prefix rule.
_SNAPSHOT_FUNCTIONS: Dict[str, CapabilityCategory] = {
    **_group(CapabilityCategory.FILESYSTEM, _FILESYSTEM),
    **_group(CapabilityCategory.CLOCK, ("clock_res_get", "clock_time_get")),
    **_group(CapabilityCategory.RANDOMNESS, ("random_get",)),
    **_group(CapabilityCategory.ENVIRONMENT, ("environ_get", "environ_sizes_get")),
    **_group(CapabilityCategory.ARGUMENTS, ("args_get", "args_sizes_get")),
    **_group(CapabilityCategory.POLLING, ("poll_oneoff",)),
    **_group(CapabilityCategory.PROCESS_CONTROL, ("proc_exit", "proc_raise", "sched_yield")),
}

_SOCKET_PREFIX = (("sock_", CapabilityCategory.NETWORKING),)


def _table(name: str) -> NamespaceTable:
    return NamespaceTable(
        name=name,
        functions=MappingProxyType(dict(_SNAPSHOT_FUNCTIONS)),
        prefixes=_SOCKET_PREFIX,
    )


WASI_NAMESPACES: Mapping[str, NamespaceTable] = MappingProxyType({
    WASI_SNAPSHOT_PREVIEW1: _table(WASI_SNAPSHOT_PREVIEW1),
    WASI_UNSTABLE: _table(WASI_UNSTABLE),
})
