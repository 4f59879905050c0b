import pytest
from pydantic import ValidationError
from app.core.pagination import PageDTO, ListQueryDTO, sort_clause, search_clause
from app.domain.exceptions import InvalidInput


@pytest.mark.parametrize(
    "total, page_size, expected_pages",
    [
        (0, 10, 1),
        (10, 10, 1),
        (1, 10, 1),
        (0, 0, 1),
        (11, 10, 2),
        (20, 10, 2),
        (5, 2, 3),
        (100, -5, 1)
    ]
)
def test_pages_calculation(total, page_size, expected_pages):
    dto = PageDTO(items=[], total=total, page=1, page_size=page_size)
    assert dto.pages == expected_pages


@pytest.mark.parametrize(
    "total, page_size, page, expected_has_next",
    [
        (0, 10, 1, False),
        (10, 10, 1, False),
        (11, 10, 1, True),
        (11, 10, 2, False),
        (21, 10, 1, True),
        (21, 10, 3, False),
        (21, 0, 1, False),
        (21, 10, 5, False),
    ]
)
def test_has_next(total, page_size, page, expected_has_next):
    dto = PageDTO(items=[], total=total, page=page, page_size=page_size)
    assert dto.has_next == expected_has_next


def test_sort_clause_unknown_column_raises_invalid_input():
    from sqlalchemy import column

    with pytest.raises(InvalidInput) as e:
        sort_clause({"name": column("name")}, "password_hash", "asc", default="name")

    assert e.value.ctx == {"sort_by": "password_hash", "allowed": ["name"]}


@pytest.mark.parametrize("sort_dir, expected", [("asc", "ASC"), ("desc", "DESC")])
def test_sort_clause_uses_default_and_direction(sort_dir, expected):
    from sqlalchemy import column

    (clause,) = sort_clause({"name": column("name")}, None, sort_dir, default="name")

    assert str(clause) == f"name {expected}"


@pytest.mark.parametrize("q", [None, "", "   "])
def test_search_clause_blank_query_returns_none(q):
    from sqlalchemy import column

    assert search_clause(q, column("name")) is None


def test_search_clause_matches_any_column():
    from sqlalchemy import column

    clause = search_clause(" acme ", column("company_name"), column("address"))
    compiled = clause.compile(compile_kwargs={"literal_binds": True})

    assert "company_name" in str(compiled)
    assert "address" in str(compiled)
    assert "'%acme%'" in str(compiled)


def test_list_query_rejects_unknown_params():
    with pytest.raises(ValidationError):
        ListQueryDTO(page=1, foo="bar")
