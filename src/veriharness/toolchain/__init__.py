"""Resolution of toolchain, JVM and build-artifact locations."""

from veriharness.toolchain.artifacts import ExternArtifact, resolve_extern_artifact
from veriharness.toolchain.jvm import JvmLocator, native_jvm_library_name
from veriharness.toolchain.resolver import ToolchainResolver, read_pinned_version

__all__ = [
    "ExternArtifact",
    "JvmLocator",
    "ToolchainResolver",
    "native_jvm_library_name",
    "read_pinned_version",
    "resolve_extern_artifact",
]
