"""Batch export of a game data folder to JSON documents and model modules."""

import logging
import shutil
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import TypeAdapter

from dofus_data.core.d2i import process_d2i_file
from dofus_data.core.d2o import process_d2o_file
from dofus_data.core.errors import DecodeError
from dofus_data.core.generator import build_class_source, generate_models
from dofus_data.models import Translations

logger = logging.getLogger(__name__)

COMMON_FOLDER = "common"
I18N_FOLDER = "i18n"
MODELS_FOLDER = "models"
TRANSLATION_FOLDER = "translation"

_D2O_SUFFIX = ".d2o"
_D2I_SUFFIX = ".d2i"
_D2I_PREFIX = "i18n_"

_translations_adapter = TypeAdapter(Translations)


class DataFolderError(ValueError):
    """Raised when the game data folder does not have the expected layout."""


@dataclass
class ExportReport:
    d2o_parsed: int = 0
    d2i_parsed: int = 0
    model_modules: int = 0
    failures: dict[str, str] = field(default_factory=dict)


def check_data_folder(data_dir: Path) -> None:
    for folder in (data_dir, data_dir / COMMON_FOLDER, data_dir / I18N_FOLDER):
        if not folder.exists():
            raise DataFolderError(f"Folder does not exist: {folder}")
        if not folder.is_dir():
            raise DataFolderError(f"Not a directory: {folder}")


def prepare_output_folder(output_dir: Path) -> None:
    """Recreate the output folder with its ``common``, ``models`` and ``translation`` subfolders."""
    shutil.rmtree(output_dir, ignore_errors=True)
    for name in (COMMON_FOLDER, MODELS_FOLDER, TRANSLATION_FOLDER):
        (output_dir / name).mkdir(parents=True)


def locale_from_d2i_name(file_name: str) -> str:
    return file_name.removeprefix(_D2I_PREFIX).removesuffix(_D2I_SUFFIX)


def _module_name(package_name: str, depth: int) -> str:
    return "_".join(package_name.split(".")[-depth:]) or "root"


def module_names(package_names: Iterable[str]) -> dict[str, str]:
    """Map each package to a module name made of its shortest unambiguous trailing segments.

    ``a.monsters`` and ``b.monsters`` become ``a_monsters`` and ``b_monsters``
    while a lone ``c.items`` stays ``items``.
    """
    packages = sorted(set(package_names))
    depth = dict.fromkeys(packages, 1)
    while True:
        names = {package: _module_name(package, depth[package]) for package in packages}
        counts = Counter(names.values())
        clashing = [p for p in packages if counts[names[p]] > 1 and depth[p] <= p.count(".")]
        if not clashing:
            break
        for package in clashing:
            depth[package] += 1

    modules: dict[str, str] = {}
    taken: set[str] = set()
    for package in packages:
        candidate = names[package]
        suffix = 2
        while candidate in taken:
            candidate = f"{names[package]}_{suffix}"
            suffix += 1
        taken.add(candidate)
        modules[package] = candidate
    return modules


def _files_with_suffix(folder: Path, suffix: str) -> list[Path]:
    files = []
    for path in sorted(folder.iterdir()):
        if path.is_dir():
            logger.debug("skipping directory %s", path.name)
        elif path.suffix != suffix:
            logger.debug("skipping file %s (wrong extension)", path.name)
        else:
            files.append(path)
    return files


def export_common_folder(common_dir: Path, output_dir: Path, report: ExportReport) -> None:
    """Write one JSON document per D2O file, then one model module per class package."""
    packages: dict[str, dict[str, str]] = {}

    for path in _files_with_suffix(common_dir, _D2O_SUFFIX):
        try:
            data = process_d2o_file(path)
        except (DecodeError, OSError) as exc:
            logger.error("error parsing %s: %s", path.name, exc)
            report.failures[str(path)] = str(exc)
            continue

        output_path = output_dir / COMMON_FOLDER / f"{path.name}.json"
        output_path.write_text(data.to_json(), encoding="utf-8")
        report.d2o_parsed += 1

        for cls in data.classes.values():
            classes = packages.setdefault(cls.package_name, {})
            classes[cls.package_class] = build_class_source(cls, data.classes)

    logger.info("%d d2o files parsed", report.d2o_parsed)

    modules = module_names(packages)
    for package_name, class_sources in sorted(packages.items()):
        module_path = output_dir / MODELS_FOLDER / f"{modules[package_name]}.py"
        module_path.write_text(generate_models(class_sources), encoding="utf-8")
        report.model_modules += 1


def export_i18n_folder(i18n_dir: Path, output_dir: Path, report: ExportReport) -> None:
    for path in _files_with_suffix(i18n_dir, _D2I_SUFFIX):
        try:
            translations = process_d2i_file(path)
        except (DecodeError, OSError) as exc:
            logger.error("error parsing %s: %s", path.name, exc)
            report.failures[str(path)] = str(exc)
            continue

        output_path = output_dir / TRANSLATION_FOLDER / f"{locale_from_d2i_name(path.name)}.json"
        output_path.write_bytes(_translations_adapter.dump_json(translations, indent=2))
        report.d2i_parsed += 1

    logger.info("%d d2i files parsed", report.d2i_parsed)


def run_export(data_dir: str | Path, output_dir: str | Path) -> ExportReport:
    """Export every D2O and D2I file under ``data_dir`` into ``output_dir``.

    A file that fails to decode is logged and recorded in the report; the
    remaining files are still exported.
    """
    data_path = Path(data_dir)
    output_path = Path(output_dir)
    check_data_folder(data_path)
    prepare_output_folder(output_path)

    report = ExportReport()
    export_common_folder(data_path / COMMON_FOLDER, output_path, report)
    export_i18n_folder(data_path / I18N_FOLDER, output_path, report)
    return report
