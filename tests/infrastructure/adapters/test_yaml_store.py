from datetime import date

import pytest
import yaml

from lexis.infrastructure.adapters.yaml_store import (
    YamlReviewRepository,
    record_from_dict,
    record_to_dict,
)


@pytest.mark.asyncio
async def test_missing_file_is_empty(tmp_path):
    repo = YamlReviewRepository(tmp_path / "reviews.yaml")
    assert await repo.list_records("u") == []
    assert not (tmp_path / "reviews.yaml").exists()


@pytest.mark.asyncio
async def test_persists_across_instances(tmp_path, make_record, today):
    path = tmp_path / "nested" / "reviews.yaml"
    record = make_record("lucid", repetitions=2, interval=6, last_review_date=today)

    await YamlReviewRepository(path).save_record("alice", record)

    reloaded = await YamlReviewRepository(path).get_record("alice", record.id)
    assert reloaded == record


@pytest.mark.asyncio
async def test_file_layout(tmp_path, make_record):
    path = tmp_path / "reviews.yaml"
    await YamlReviewRepository(path).save_record("alice", make_record("lucid"))

    doc = yaml.safe_load(path.read_text())
    assert doc["version"] == 1
    row = doc["users"]["alice"][0]
    assert row["term"] == "lucid"
    assert row["next_review_date"] == date(2026, 3, 10)
    assert row["last_review_date"] is None
    assert "category" not in row


@pytest.mark.asyncio
async def test_no_temp_files_left(tmp_path, make_record):
    path = tmp_path / "reviews.yaml"
    repo = YamlReviewRepository(path)
    await repo.add_records("u", [make_record("a"), make_record("b")])
    await repo.delete_record("u", "id-a")

    assert [p.name for p in tmp_path.iterdir()] == ["reviews.yaml"]
    assert [r.term for r in await YamlReviewRepository(path).list_records("u")] == ["b"]


def test_record_from_dict_tolerates_strings_and_unknown_keys(make_record):
    row = record_to_dict(make_record("lucid"))
    row["next_review_date"] = "2026-03-12"
    row["created_at"] = "2026-01-01"
    row["ease_factor"] = "2.5"
    row["legacy_field"] = "ignored"

    record = record_from_dict(row)

    assert record.next_review_date == date(2026, 3, 12)
    assert record.ease_factor == 2.5
    assert record.term == "lucid"


@pytest.mark.asyncio
async def test_bad_row_does_not_truncate_store(tmp_path, make_record):
    path = tmp_path / "reviews.yaml"
    rows = [record_to_dict(make_record(term)) for term in ("a", "b", "c")]
    rows[1]["next_review_date"] = "not-a-date"
    path.write_text(yaml.safe_dump({"version": 1, "users": {"u": rows}}))
    repo = YamlReviewRepository(path)

    with pytest.raises(ValueError):
        await repo.list_records("u")
    with pytest.raises(ValueError):
        await repo.list_records("u")
    with pytest.raises(ValueError):
        await repo.save_record("u", make_record("d"))

    terms = {row["term"] for row in yaml.safe_load(path.read_text())["users"]["u"]}
    assert terms == {"a", "b", "c"}


@pytest.mark.asyncio
async def test_non_mapping_document_is_rejected(tmp_path, make_record):
    path = tmp_path / "reviews.yaml"
    path.write_text("- term: a\n")
    repo = YamlReviewRepository(path)

    with pytest.raises(ValueError, match="not a lexis review store"):
        await repo.save_record("u", make_record("d"))
    assert path.read_text() == "- term: a\n"
