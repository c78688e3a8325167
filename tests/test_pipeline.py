"""Tests for the generation pipeline against an in-memory filesystem."""

from pathlib import Path

import pytest

from oasgen.config import GeneratorOptions
from oasgen.errors import ParseFailure
from oasgen.pipeline import generate_all, generate_document

OPTIONS = GeneratorOptions(source_dir=Path("/specs"))


def _generated(fs) -> dict[Path, str]:
    return {p: text for p, text in fs.files.items() if "generated" in p.parts}


class TestGenerateAll:
    def test_outputs_next_to_each_document(self, memory_fs, reporter):
        summary = generate_all(OPTIONS, memory_fs, reporter)

        assert summary.generated == [Path("/specs/nested/users-api.yml"), Path("/specs/petstore.yaml")]
        assert sorted(str(p) for p in _generated(memory_fs)) == [
            "/specs/generated/models/Dog.ts",
            "/specs/generated/models/Pet.ts",
            "/specs/generated/models/PetStatus.ts",
            "/specs/generated/models/User.ts",
            "/specs/generated/models/index.ts",
            "/specs/generated/openApi.ts",
            "/specs/nested/generated/models/Role.ts",
            "/specs/nested/generated/models/index.ts",
            "/specs/nested/generated/openApi.ts",
        ]
        client = memory_fs.files[Path("/specs/nested/generated/openApi.ts")]
        assert "export class UsersApiClient {" in client
        assert "getUsers(queryParams?: { page?: any }): string {" in client
        assert "deleteUsersBy(id: string | number): string {" in client

    def test_broken_document_is_isolated(self, memory_fs, reporter):
        summary = generate_all(OPTIONS, memory_fs, reporter)

        assert summary.failed == [Path("/specs/nested/broken.yaml")]
        assert not summary.ok
        errors = reporter.at("error")
        assert len(errors) == 1
        assert "/specs/nested/broken.yaml" in errors[0]
        assert "invalid YAML" in errors[0]
        assert reporter.at("info")[-1] == "Generation finished."

    def test_idempotent(self, memory_fs, reporter):
        generate_all(OPTIONS, memory_fs, reporter)
        first = _generated(memory_fs)
        generate_all(OPTIONS, memory_fs, reporter)
        assert _generated(memory_fs) == first

    def test_write_failure_is_isolated(self, memory_fs, reporter):
        memory_fs.read_only.add(Path("/specs/generated"))
        summary = generate_all(OPTIONS, memory_fs, reporter)

        assert Path("/specs/petstore.yaml") in summary.failed
        assert Path("/specs/nested/users-api.yml") in summary.generated
        assert any("cannot write generated files" in e for e in reporter.at("error"))

    def test_undecodable_document_is_isolated(self, tmp_path, reporter):
        (tmp_path / "a-bad.yaml").write_bytes(b"info:\n  title: caf\xe9\n")
        (tmp_path / "b-good.yaml").write_text("paths:\n  /ping:\n    get: {}\n", encoding="utf-8")

        summary = generate_all(GeneratorOptions(source_dir=tmp_path), reporter=reporter)

        assert summary.failed == [tmp_path / "a-bad.yaml"]
        assert summary.generated == [tmp_path / "b-good.yaml"]
        assert (tmp_path / "generated" / "openApi.ts").exists()
        errors = reporter.at("error")
        assert len(errors) == 1
        assert "cannot read document" in errors[0]

    def test_scan_failure_reported_once(self, fs_factory, reporter):
        summary = generate_all(GeneratorOptions(source_dir=Path("/missing")), fs_factory(), reporter)

        assert summary.scan_failed
        assert summary.documents == []
        assert len(reporter.at("error")) == 1
        assert "cannot scan directory" in reporter.at("error")[0]

    def test_no_documents(self, fs_factory, reporter):
        fs = fs_factory({"/specs/notes.txt": "hello"})
        summary = generate_all(OPTIONS, fs, reporter)

        assert summary.ok
        assert summary.documents == []
        assert reporter.at("warning") == ["No YAML files found in /specs"]

    def test_progress_messages(self, memory_fs, reporter):
        generate_all(OPTIONS, memory_fs, reporter)
        info = reporter.at("info")
        assert info[0] == "Found 3 OpenAPI document(s) in /specs"
        assert "Generated 4 model(s) for petstore" in info
        assert "Generated client PetstoreClient for petstore" in info


class TestGenerateDocument:
    def test_shape_issues_become_warnings(self, fs_factory, reporter):
        fs = fs_factory({"/specs/api.yaml": (
            "components:\n"
            "  schemas:\n"
            "    Thing:\n"
            "      type: object\n"
            "      properties:\n"
            "        ok: {type: string}\n"
            "        bad: [1, 2]\n"
        )})
        generate_document(Path("/specs/api.yaml"), OPTIONS, fs, reporter)

        assert fs.files[Path("/specs/generated/models/Thing.ts")] == (
            "export interface Thing {\n"
            "  ok?: string;\n"
            "  bad?: any;\n"
            "}\n"
        )
        warnings = reporter.at("warning")
        assert len(warnings) == 1
        assert "components.schemas.Thing.properties.bad" in warnings[0]

    def test_no_schemas_writes_client_only(self, fs_factory, reporter):
        fs = fs_factory({"/specs/api.yaml": "paths:\n  /ping:\n    get: {}\n"})
        files = generate_document(Path("/specs/api.yaml"), OPTIONS, fs, reporter)

        assert list(files) == [Path("/specs/generated/openApi.ts")]
        assert "No schemas in api, skipping models" in reporter.at("info")

    def test_duplicate_method_names_warned(self, fs_factory, reporter):
        fs = fs_factory({"/specs/api.yaml": (
            "paths:\n"
            "  /users/{id}:\n"
            "    get: {}\n"
            "  /users/{name}:\n"
            "    get: {}\n"
        )})
        files = generate_document(Path("/specs/api.yaml"), OPTIONS, fs, reporter)

        client = files[Path("/specs/generated/openApi.ts")]
        assert "getUsersBy(id: string | number): string {" in client
        assert "getUsersBy2(name: string | number): string {" in client
        assert reporter.at("warning") == [
            "/specs/api.yaml: GET /users/{name}: method getUsersBy renamed to getUsersBy2",
        ]

    def test_custom_parser_errors_carry_path(self, fs_factory, reporter):
        def failing_parser(text):
            raise ParseFailure("unsupported version")

        fs = fs_factory({"/specs/api.yaml": "openapi: 2.0\n"})
        with pytest.raises(ParseFailure) as excinfo:
            generate_document(Path("/specs/api.yaml"), OPTIONS, fs, reporter, parser=failing_parser)
        assert str(excinfo.value) == "/specs/api.yaml: unsupported version"
