"""
Source renderers for each target syntax.

Each renderer receives constants already validated and ordered, and
returns the complete file text. Output must not depend on anything but
the arguments (no timestamps, no environment).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from src.core.entities import BundleIdentity, Category, SymbolicConstant

from .models import EmissionConfig, TargetSyntax

Renderer = Callable[[Sequence[SymbolicConstant], BundleIdentity | None, EmissionConfig], str]
Quoter = Callable[[str], str]

SWIFT_KEYWORDS = frozenset(
    {
        "associatedtype", "class", "default", "defer", "deinit", "enum",
        "extension", "fileprivate", "func", "import", "init", "inout",
        "internal", "let", "operator", "private", "protocol", "public",
        "repeat", "return", "self", "static", "struct", "subscript",
        "super", "switch", "true", "false", "typealias", "var", "where",
        "while", "in", "is", "nil", "case", "for", "if", "else", "do",
        "break", "continue", "guard", "throw", "throws", "try", "catch",
    }
)

_SIMPLE_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def _escape(text: str, control: Callable[[int], str]) -> str:
    """Double-quote text; control characters go through the target's escape."""
    out = []
    for ch in text:
        code = ord(ch)
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif code < 0x20 or code == 0x7F:
            out.append(control(code))
        else:
            out.append(ch)
    return '"' + "".join(out) + '"'


def python_string(text: str) -> str:
    return _escape(text, lambda code: f"\\x{code:02x}")


def swift_string(text: str) -> str:
    return _escape(text, lambda code: f"\\u{{{code:X}}}")


def c_string(text: str) -> str:
    """C string literal; octal escapes are always three digits."""
    return _escape(text, lambda code: f"\\{code:03o}")


def objc_string(text: str) -> str:
    return "@" + c_string(text)


def group_by_category(
    constants: Sequence[SymbolicConstant],
) -> list[tuple[Category, list[SymbolicConstant]]]:
    """Group constants by category in enum order, keeping registry order inside."""
    return [
        (category, [c for c in constants if c.category is category])
        for category in Category
    ]


def _doc_line(constant: SymbolicConstant, quote: Quoter) -> str:
    return f"The {quote(constant.target_name)} asset catalog {constant.category.value} resource."


# --- Python ---


def render_python(
    constants: Sequence[SymbolicConstant],
    bundle: BundleIdentity | None,
    config: EmissionConfig,
) -> str:
    exported = [c.symbol_name for c in constants if c.is_public]

    lines = [
        f"# This file is generated by {config.generator_name}. Do not edit.",
        '"""Asset catalog symbols."""',
        "",
    ]
    if exported:
        lines.append("__all__ = [")
        lines.extend(f"    {python_string(name)}," for name in exported)
        lines.append("]")
    else:
        lines.append("__all__: list[str] = []")

    if bundle is not None:
        lines += [
            "",
            "# The resource bundle ID.",
            f"{config.python_bundle_id_symbol} = {python_string(bundle.bundle_id)}",
        ]

    for category, group in group_by_category(constants):
        if not group:
            continue
        lines += ["", f"# MARK: - {category.label} Symbols -"]
        for constant in group:
            lines += [
                "",
                f"# {_doc_line(constant, python_string)}",
                f"{constant.symbol_name} = {python_string(constant.target_name)}",
            ]

    return "\n".join(lines) + "\n"


# --- Objective-C header ---


def render_objc_header(
    constants: Sequence[SymbolicConstant],
    bundle: BundleIdentity | None,
    config: EmissionConfig,
) -> str:
    prefix = config.namespace_prefix
    private = f"{prefix.upper()}_SWIFT_PRIVATE"

    lines = [
        f"// This file is generated by {config.generator_name}. Do not edit.",
        "",
        "#import <Foundation/Foundation.h>",
        "",
        "#if __has_attribute(swift_private)",
        f"#define {private} __attribute__((swift_private))",
        "#else",
        f"#define {private}",
        "#endif",
    ]

    if bundle is not None:
        lines += [
            "",
            "/// The resource bundle ID.",
            f"static NSString * const {prefix}{config.bundle_id_symbol} {private} = "
            f"{objc_string(bundle.bundle_id)};",
        ]

    for _category, group in group_by_category(constants):
        for constant in group:
            attribute = "" if constant.is_public else f" {private}"
            lines += [
                "",
                f"/// {_doc_line(constant, c_string)}",
                f"static NSString * const {prefix}{constant.symbol_name}{attribute} = "
                f"{objc_string(constant.target_name)};",
            ]

    lines += ["", f"#undef {private}"]
    return "\n".join(lines) + "\n"


# --- Swift ---

SWIFT_AVAILABILITY = "@available(iOS 17.0, macOS 14.0, tvOS 17.0, watchOS 10.0, *)"

# Framework module -> (availability attributes, compile-time guard on the initialiser)
PLATFORM_FRAMEWORKS: dict[str, tuple[list[str], str]] = {
    "AppKit": (
        ["@available(macOS 14.0, *)", "@available(macCatalyst, unavailable)"],
        "!targetEnvironment(macCatalyst)",
    ),
    "UIKit": (
        ["@available(iOS 17.0, tvOS 17.0, *)", "@available(watchOS, unavailable)"],
        "!os(watchOS)",
    ),
}

PLATFORM_TYPES: dict[Category, list[tuple[str, str]]] = {
    Category.COLOR: [("AppKit", "NSColor"), ("UIKit", "UIColor")],
    Category.IMAGE: [("AppKit", "NSImage"), ("UIKit", "UIImage")],
}


def swift_identifier(name: str) -> str:
    return f"`{name}`" if name in SWIFT_KEYWORDS else name


def _swift_modifier(constant: SymbolicConstant, keyword: str) -> str:
    return f"public static {keyword}" if constant.is_public else f"static {keyword}"


def _swift_doc(constant: SymbolicConstant) -> str:
    return f"    /// The {swift_string(constant.target_name)} asset catalog {constant.category.value}."


def _platform_extension(module: str, type_name: str, group: list[SymbolicConstant]) -> list[str]:
    availability, guard = PLATFORM_FRAMEWORKS[module]
    qualified = f"{module}.{type_name}"
    lines = [f"#if canImport({module})", *availability, f"extension {qualified} {{", ""]
    for constant in group:
        accessor = swift_identifier(constant.accessor_name)
        lines += [
            _swift_doc(constant),
            f"    {_swift_modifier(constant, 'var')} {accessor}: {qualified} {{",
            f"#if {guard}",
            f"        .init(resource: .{accessor})",
            "#else",
            "        .init()",
            "#endif",
            "    }",
            "",
        ]
    lines += ["}", "#endif"]
    return lines


def _swiftui_color_extensions(group: list[SymbolicConstant]) -> list[str]:
    lines = ["#if canImport(SwiftUI)"]
    for extended in ("SwiftUI.Color", "SwiftUI.ShapeStyle where Self == SwiftUI.Color"):
        lines += [SWIFT_AVAILABILITY, f"extension {extended} {{", ""]
        for constant in group:
            accessor = swift_identifier(constant.accessor_name)
            lines += [
                _swift_doc(constant),
                f"    {_swift_modifier(constant, 'var')} {accessor}: SwiftUI.Color "
                f"{{ .init(.{accessor}) }}",
                "",
            ]
        lines += ["}", ""]
    lines[-1] = "#endif"
    return lines


def render_swift(
    constants: Sequence[SymbolicConstant],
    bundle: BundleIdentity | None,
    config: EmissionConfig,
) -> str:
    frameworks = config.swift_framework_extensions
    lines = [
        f"// This file is generated by {config.generator_name}. Do not edit.",
        "",
        "import Foundation",
    ]
    if frameworks:
        for module in (*PLATFORM_FRAMEWORKS, "SwiftUI"):
            lines += [f"#if canImport({module})", f"import {module}", "#endif"]
    lines += [
        "#if canImport(DeveloperToolsSupport)",
        "import DeveloperToolsSupport",
        "#endif",
        "",
        "#if SWIFT_PACKAGE",
        "private let resourceBundle = Foundation.Bundle.module",
        "#else",
        "private class ResourceBundleClass {}",
        "private let resourceBundle = Foundation.Bundle(for: ResourceBundleClass.self)",
        "#endif",
    ]

    if bundle is not None:
        lines += [
            "",
            "/// The resource bundle ID.",
            f"let {config.swift_bundle_id_symbol} = {swift_string(bundle.bundle_id)}",
        ]

    groups = group_by_category(constants)
    for category, group in groups:
        resource_type = f"DeveloperToolsSupport.{category.label}Resource"
        lines += [
            "",
            f"// MARK: - {category.label} Symbols -",
            "",
            SWIFT_AVAILABILITY,
            f"extension {resource_type} {{",
            "",
        ]
        for constant in group:
            lines += [
                f"    /// {_doc_line(constant, swift_string)}",
                f"    {_swift_modifier(constant, 'let')} {swift_identifier(constant.accessor_name)} = "
                f"{resource_type}(name: {swift_string(constant.target_name)}, bundle: resourceBundle)",
                "",
            ]
        lines.append("}")

    if frameworks:
        for category, group in groups:
            lines += ["", f"// MARK: - {category.label} Symbol Extensions -"]
            for module, type_name in PLATFORM_TYPES[category]:
                lines += [""] + _platform_extension(module, type_name, group)
            if category is Category.COLOR:
                lines += [""] + _swiftui_color_extensions(group)

    return "\n".join(lines) + "\n"


RENDERERS: dict[TargetSyntax, Renderer] = {
    TargetSyntax.PYTHON: render_python,
    TargetSyntax.OBJC_HEADER: render_objc_header,
    TargetSyntax.SWIFT: render_swift,
}
