#!/usr/bin/env python3
"""
Path helpers for locating and naming localization files.

The compound ".i18n.json" extension is treated as a single extension so
that culture replacement in "common.en.i18n.json" touches the culture
segment and not the "i18n" marker.
"""

import os

I18NEXT_EXTENSION = ".i18n.json"


def get_extension(path: str) -> str:
    """Return the file extension, treating ".i18n.json" as one extension."""
    name = os.path.basename(path)
    if name.lower().endswith(I18NEXT_EXTENSION):
        return name[-len(I18NEXT_EXTENSION):]
    return os.path.splitext(name)[1]


def get_file_name_without_extension(path: str) -> str:
    """Return the file name without its (possibly compound) extension."""
    name = os.path.basename(path)
    extension = get_extension(name)
    return name[:len(name) - len(extension)] if extension else name


def replace_extension(path: str, extension: str) -> str:
    """Swap the extension of a path, keeping its directory and stem."""
    if not extension.startswith('.'):
        extension = '.' + extension
    directory = os.path.dirname(path)
    return os.path.join(directory, get_file_name_without_extension(path) + extension)


def generate_target_path(
    source_file: str,
    input_path: str,
    output_path: str,
    source_culture: str,
    target_culture: str,
) -> str:
    """
    Build the path of the target-culture counterpart of a source file.

    The culture segment of the file name is replaced ("common.en.json" ->
    "common.tr.json"). Files named after their directory layout
    ("locales/en/translation.json") get the culture directory replaced
    instead. Directory structure below a directory input is mirrored under
    the output path.

    Args:
        source_file: Base-culture file being mirrored
        input_path: File or directory the source file was discovered from
        output_path: Root for generated files (None or "" keeps them beside the source)
        source_culture: Culture of the source file
        target_culture: Culture to generate

    Returns:
        Target file path
    """
    source_dir = os.path.dirname(source_file)
    input_is_dir = os.path.isdir(input_path)
    if input_is_dir:
        root = output_path or input_path
        relative_dir = os.path.relpath(source_dir or os.curdir, input_path)
        dir_parts = [] if relative_dir == os.curdir else relative_dir.split(os.sep)
    else:
        root = output_path or os.path.dirname(source_dir)
        dir_parts = [os.path.basename(source_dir)] if source_dir else []

    extension = get_extension(source_file)
    parts = get_file_name_without_extension(source_file).split('.')

    dir_replaced = False
    if parts[-1].lower() == source_culture.lower():
        parts[-1] = target_culture
    elif dir_parts and dir_parts[-1].lower() == source_culture.lower():
        dir_parts[-1] = target_culture
        dir_replaced = True
    else:
        parts.append(target_culture)

    if not input_is_dir and output_path and not dir_replaced:
        # A single renamed file goes straight into the output directory
        dir_parts = []

    return os.path.join(root, *dir_parts, '.'.join(parts) + extension)
