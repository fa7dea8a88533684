from __future__ import annotations

"""
Bazel and Objective-C Text Templates.

Renders the literal contents of every generated file. Functions here only
format strings; naming and dependency decisions are taken by the caller.
"""

from typing import Iterable, List

from bzlbench.domain.constants import ENTRY_POINT_FILE_NAME, ROOT_TARGET_NAME

APP_RULE_LOAD = 'load("@build_bazel_rules_ios//rules:app.bzl", "ios_application")'
FRAMEWORK_RULE_LOAD = 'load("@build_bazel_rules_ios//rules:framework.bzl", "apple_framework")'

# -----------------------------------------------------------------------------
# BUILD FILES
# -----------------------------------------------------------------------------

def render_root_build(labels: Iterable[str], bundle_id: str, minimum_os_version: str) -> str:
    """
    Render the root BUILD file declaring the benchmark application.

    Args:
        labels: Labels of the depth-1 libraries the application links.
        bundle_id: Application bundle identifier.
        minimum_os_version: Deployment target.

    Returns:
        str: BUILD file content.
    """
    deps = _quoted_list(labels)
    return (
        f"{APP_RULE_LOAD}\n"
        "ios_application(\n"
        f'    name = "{ROOT_TARGET_NAME}",\n'
        f'    bundle_id = "{bundle_id}",\n'
        "    families = [\n"
        '        "iphone",\n'
        '        "ipad",\n'
        "    ],\n"
        f'    srcs = ["{ENTRY_POINT_FILE_NAME}"],\n'
        f'    minimum_os_version = "{minimum_os_version}",\n'
        f"    deps = [{deps}],\n"
        ")\n"
    )


def render_library_build(
        target_name: str,
        module_name: str,
        srcs: Iterable[str],
        deps: Iterable[str],
) -> str:
    """
    Render the BUILD file of one generated framework library.

    Args:
        target_name: Local target name (lib_<rank>).
        module_name: Clang module name of the framework.
        srcs: Stub file names, headers and implementations interleaved.
        deps: Labels of the child libraries.

    Returns:
        str: BUILD file content.
    """
    return (
        f"{FRAMEWORK_RULE_LOAD}\n"
        f'apple_framework(name = "{target_name}",\n'
        f'    module_name = "{module_name}",\n'
        "    srcs = [\n"
        f"        {_quoted_list(srcs)}\n"
        "    ],\n"
        "    deps = [\n"
        f"{_quoted_list(deps)}\n"
        "    ],\n"
        '    visibility = ["//visibility:public"])\n'
    )

# -----------------------------------------------------------------------------
# OBJECTIVE-C STUBS
# -----------------------------------------------------------------------------

def header_file_name(library_name: str, i: int) -> str:
    return f"{library_name}_Hdr{i}.h"


def source_file_name(library_name: str, i: int) -> str:
    return f"{library_name}_Src{i}.m"


def class_name(library_name: str, i: int) -> str:
    return f"{library_name}_Hdr{i}_Class"


def render_header(library_name: str, i: int, modules: Iterable[str]) -> str:
    """Header importing every given module and declaring an empty class."""
    lines: List[str] = [f"@import {m};" for m in modules]
    lines.append(f"@interface {class_name(library_name, i)} : NSObject")
    lines.append("@end")
    return "\n".join(lines) + "\n"


def render_source(library_name: str, i: int) -> str:
    """Implementation including its paired header through the module path."""
    return (
        f'#include "{library_name}/{header_file_name(library_name, i)}"\n'
        f"@implementation {class_name(library_name, i)}\n"
        "@end\n"
    )


def render_entry_point() -> str:
    return "int main(int argc, char *argv[]) { return 0; }\n"


def render_bazel_version(version: str) -> str:
    return f"{version}\n"

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _quoted_list(items: Iterable[str]) -> str:
    return ", ".join(f'"{item}"' for item in items)
