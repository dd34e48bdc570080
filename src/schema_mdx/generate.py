"""Generation entry points combining loading, rendering and writing."""

from __future__ import annotations

import logging
from pathlib import Path

from schema_mdx import codegen_graphql, codegen_openapi
from schema_mdx.config import FilesConfig, GenerateConfig
from schema_mdx.errors import ConfigurationError
from schema_mdx.model import Document, TagDocument
from schema_mdx.schema import LoadedSchema, expand_inputs, load_schema
from schema_mdx.writer import FileSystem, write_documents

logger = logging.getLogger(__name__)


def generate_all(config: GenerateConfig, fs: FileSystem | None = None) -> None:
    """Generate one MDX file per member of ``config.input`` below ``config.output``."""
    config.validate()
    documents = generate_documents(config.input or "", cwd=config.cwd)
    written = write_documents(config.output_dir, documents, fs)
    logger.info("generated %d documents in %s", len(written), config.output_dir)


def generate_documents(input: str | Path, *, cwd: str | Path | None = None) -> list[Document]:
    """Load *input* and render its documents without touching the filesystem."""
    return render_schema(load_schema(input, cwd=cwd))


def generate_tags(input: str | Path, *, cwd: str | Path | None = None) -> list[TagDocument]:
    """Load the OpenAPI document *input* and render one document per tag."""
    schema = load_schema(input, cwd=cwd)
    if schema.openapi is None:
        raise ConfigurationError(
            "tag grouping requires an OpenAPI document", details={"input": str(schema.source)}
        )
    return codegen_openapi.generate_tags(schema.openapi)


def generate_files(config: FilesConfig, fs: FileSystem | None = None) -> list[Path]:
    """Generate documents for every file matched by ``config.input``.

    With ``per="entity"`` each member gets its own file; documents of
    different inputs are placed in a directory named after the input when
    more than one input matched. With ``per="file"`` each input produces a
    single ``<stem>.mdx`` holding all of its documents.

    All inputs are loaded and rendered before the first write.
    """
    config.validate()
    sources = expand_inputs(config.input, config.cwd)
    if not sources:
        logger.warning("no schema files match %s", ", ".join(config.input))
        return []

    _check_unique_stems(sources)
    documents: list[Document] = []
    for source in sources:
        rendered = render_schema(load_schema(source))
        if config.per == "file":
            documents.append(
                Document(
                    output_path=f"{source.stem}.mdx",
                    content="\n\n".join(document.content for document in rendered),
                )
            )
        elif len(sources) > 1:
            documents.extend(
                Document(output_path=f"{source.stem}/{document.output_path}", content=document.content)
                for document in rendered
            )
        else:
            documents.extend(rendered)
        logger.debug("rendered %d documents from %s", len(rendered), source)

    written = write_documents(config.output_dir, documents, fs)
    logger.info(
        "generated %d files from %d schemas in %s", len(written), len(sources), config.output_dir
    )
    return written


def render_schema(schema: LoadedSchema) -> list[Document]:
    """Render every document of an already loaded schema."""
    if schema.graphql is not None:
        return codegen_graphql.generate_documents(schema.graphql)
    if schema.openapi is not None:
        return codegen_openapi.generate_documents(schema.openapi)
    raise ConfigurationError(
        "loaded schema holds no document", details={"source": str(schema.source)}
    )


def _check_unique_stems(sources: list[Path]) -> None:
    seen: dict[str, Path] = {}
    for source in sources:
        if source.stem in seen:
            raise ConfigurationError(
                f"inputs '{seen[source.stem]}' and '{source}' share the name '{source.stem}'",
                details={"inputs": [str(seen[source.stem]), str(source)]},
            )
        seen[source.stem] = source
