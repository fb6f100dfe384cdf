"""
Project scaffolding
Config and documentation files added by a full-project export.
"""

from jinja2 import Environment, PackageLoader, select_autoescape

from core import safe_json_dumps
from emitter import FileDescriptor, FileKind, SourceLanguage, StylingChoice
from registry import Target

from .dependencies import (
    build_instructions,
    dev_dependencies,
    framework_dependencies,
    scripts,
    uses_vite,
)
from .options import ExportOptions

VITE_PLUGINS: dict[Target, tuple[str, str]] = {
    Target.REACT: ("react", "@vitejs/plugin-react"),
    Target.VUE: ("vue", "@vitejs/plugin-vue"),
}

TAILWIND_CONTENT: dict[Target, str] = {
    Target.REACT: "./components/**/*.{js,jsx,ts,tsx}",
    Target.VUE: "./components/**/*.{vue,js,ts}",
    Target.ANGULAR: "./components/**/*.{html,ts}",
    Target.HTML: "./components/**/*.html",
}

_templates = Environment(
    loader=PackageLoader("packager", "templates"),
    autoescape=select_autoescape([]),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render(template: str, **context) -> str:
    return _templates.get_template(template).render(**context)


def _config(path: str, content: str, language: SourceLanguage,
            kind: FileKind = FileKind.CONFIG) -> FileDescriptor:
    return FileDescriptor(
        path=path,
        name=path.rsplit("/", 1)[-1],
        content=content.rstrip() + "\n",
        file_kind=kind,
        source_language=language,
    )


def package_json(options: ExportOptions) -> FileDescriptor:
    manifest = {
        "name": options.project_name,
        "version": "1.0.0",
        "private": True,
        "type": "module",
        "scripts": scripts(options),
        "dependencies": framework_dependencies(options),
        "devDependencies": dev_dependencies(options),
    }
    return _config("package.json", safe_json_dumps(manifest, indent=2), SourceLanguage.JSON)


def tsconfig_json(options: ExportOptions) -> FileDescriptor:
    compiler = {
        "target": "ES2020",
        "module": "ESNext",
        "moduleResolution": "bundler",
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "strict": True,
        "skipLibCheck": True,
        "esModuleInterop": True,
        "isolatedModules": True,
        "noEmit": True,
    }
    if options.target == Target.REACT:
        compiler["jsx"] = "react-jsx"
    if options.target == Target.ANGULAR:
        compiler["experimentalDecorators"] = True
    config = {"compilerOptions": compiler, "include": ["components"]}
    return _config("tsconfig.json", safe_json_dumps(config, indent=2), SourceLanguage.JSON)


def tailwind_config(options: ExportOptions) -> FileDescriptor:
    content = render("tailwind.config.js.j2", content_glob=TAILWIND_CONTENT[options.target])
    return _config("tailwind.config.js", content, SourceLanguage.JAVASCRIPT)


def vite_config(options: ExportOptions) -> FileDescriptor:
    plugin = VITE_PLUGINS.get(options.target)
    content = render(
        "vite.config.js.j2",
        plugin={"name": plugin[0], "package": plugin[1]} if plugin else None,
        test_environment=options.include_tests and options.target in VITE_PLUGINS,
        optimize=options.optimize_bundle,
    )
    return _config("vite.config.js", content, SourceLanguage.JAVASCRIPT)


def readme(options: ExportOptions, component_names: list[str]) -> FileDescriptor:
    content = render(
        "README.md.j2",
        project_name=options.project_name,
        target=options.target.value,
        typed=options.typed_output,
        styling=options.styling.value,
        steps=build_instructions(options),
        components=component_names,
    )
    return _config("README.md", content, SourceLanguage.MARKDOWN, FileKind.DOCUMENTATION)


def project_files(options: ExportOptions, component_names: list[str]) -> list[FileDescriptor]:
    """Scaffolding for a full-project export, in a fixed order."""
    files = [package_json(options)]
    if options.typed_output and options.target != Target.HTML:
        files.append(tsconfig_json(options))
    if options.styling == StylingChoice.TAILWIND:
        files.append(tailwind_config(options))
    if uses_vite(options.target):
        files.append(vite_config(options))
    files.append(readme(options, component_names))
    return files
