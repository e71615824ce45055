"""
End-to-end GraphQL tests against a migrated PostgreSQL database
"""

from datetime import datetime
from typing import Any

import pytest

from ledgerql.database import Database
from ledgerql.database.seed_data import CopySource, seed_demo_category, seed_from_csv
from ledgerql.graphql.context import build_context
from ledgerql.graphql.schema import schema

pytestmark = [pytest.mark.integration, pytest.mark.requires_db]


async def run(query: str, database: Database, **variables: Any) -> dict[str, Any]:
    """Execute one operation with a fresh request context."""
    result = await schema.execute(
        query, variable_values=variables or None, context_value=build_context(database)
    )
    assert result.errors is None, result.errors
    assert result.data is not None
    return result.data


SIGNUP = """
mutation Signup($data: UserCreateInput!) {
  signupUser(data: $data) { id email name posts { id title published viewCount } }
}
"""

CREATE_DRAFT = """
mutation Draft($title: String!, $email: String!) {
  createDraft(data: {title: $title}, authorEmail: $email) { id published viewCount }
}
"""


@pytest.mark.asyncio
async def test_signup_returns_user_with_unpublished_posts(database):
    data = await run(
        SIGNUP,
        database,
        data={"email": "a@b.com", "posts": [{"title": "T"}]},
    )

    user = data["signupUser"]
    assert user["email"] == "a@b.com"
    assert user["name"] is None
    assert [(p["title"], p["published"], p["viewCount"]) for p in user["posts"]] == [
        ("T", False, 0)
    ]


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected(database):
    await run(SIGNUP, database, data={"email": "dup@b.com"})

    result = await schema.execute(
        SIGNUP,
        variable_values={"data": {"email": "dup@b.com"}},
        context_value=build_context(database),
    )

    assert result.errors is not None


@pytest.mark.asyncio
async def test_draft_lifecycle(database):
    await run(SIGNUP, database, data={"email": "writer@b.com", "name": "Writer"})
    draft = (await run(CREATE_DRAFT, database, title="Hello", email="writer@b.com"))[
        "createDraft"
    ]
    post_id = draft["id"]
    assert draft["published"] is False
    assert draft["viewCount"] == 0

    drafts = await run(
        "{ draftsByUser(userUniqueInput: {email: \"writer@b.com\"}) { id } }", database
    )
    assert drafts["draftsByUser"] == [{"id": post_id}]

    toggle = "mutation T($id: Int!) { togglePublishPost(id: $id) { published } }"
    assert (await run(toggle, database, id=post_id))["togglePublishPost"] == {
        "published": True
    }
    feed = await run("{ feed(searchString: \"Hell\") { id author { email } } }", database)
    assert feed["feed"] == [{"id": post_id, "author": {"email": "writer@b.com"}}]
    assert (await run(toggle, database, id=post_id))["togglePublishPost"] == {
        "published": False
    }

    increment = "mutation I($id: Int!) { incrementPostViewCount(id: $id) { viewCount } }"
    for expected in (1, 2):
        data = await run(increment, database, id=post_id)
        assert data["incrementPostViewCount"]["viewCount"] == expected

    delete = "mutation D($id: Int!) { deletePost(id: $id) { id } }"
    deleted = await run(delete, database, id=post_id)
    assert deleted["deletePost"] == {"id": post_id}
    assert (await run(f"{{ postById(id: {post_id}) {{ id }} }}", database)) == {
        "postById": None
    }


@pytest.mark.asyncio
async def test_updates_refresh_updated_at(database):
    await run(SIGNUP, database, data={"email": "editor@b.com"})
    created = (
        await run(
            "mutation { createDraft(data: {title: \"Draft\"}, authorEmail: \"editor@b.com\")"
            " { id createdAt updatedAt } }",
            database,
        )
    )["createDraft"]

    toggled = (
        await run(
            "mutation T($id: Int!) { togglePublishPost(id: $id) { createdAt updatedAt } }",
            database,
            id=created["id"],
        )
    )["togglePublishPost"]

    assert toggled["createdAt"] == created["createdAt"]
    assert datetime.fromisoformat(toggled["updatedAt"]) > datetime.fromisoformat(
        created["updatedAt"]
    )


@pytest.mark.asyncio
async def test_mutations_on_missing_post_report_error(database):
    for mutation in ("deletePost", "togglePublishPost", "incrementPostViewCount"):
        result = await schema.execute(
            f"mutation {{ {mutation}(id: 999999) {{ id }} }}",
            context_value=build_context(database),
        )

        assert result.data == {mutation: None}
        assert result.errors[0].message == "Post with ID 999999 does not exist in the database."


@pytest.mark.asyncio
async def test_create_draft_for_unknown_author(database):
    result = await schema.execute(
        CREATE_DRAFT,
        variable_values={"title": "x", "email": "ghost@b.com"},
        context_value=build_context(database),
    )

    assert result.data == {"createDraft": None}
    assert "ghost@b.com" in result.errors[0].message


@pytest.mark.asyncio
async def test_all_users_pagination_and_filter(database):
    for i in range(5):
        await run(SIGNUP, database, data={"email": f"u{i}@b.com", "name": f"User {i}"})

    page = await run("{ allUsers(skip: 1, take: 2) { email } }", database)
    assert [u["email"] for u in page["allUsers"]] == ["u1@b.com", "u2@b.com"]

    empty = await run("{ allUsers(take: 0) { email } }", database)
    assert empty["allUsers"] == []

    filtered = await run("{ allUsers(nameFilter: \"User 3\") { email } }", database)
    assert filtered["allUsers"] == [{"email": "u3@b.com"}]

    no_match = await run("{ feed(searchString: \"zzz-no-such\") { id } }", database)
    assert no_match["feed"] == []


def write_bank_export(tmp_path):
    (tmp_path / "accounts.csv").write_text(
        "id,name,bank\nacc-1,Checking,Bank A\n", encoding="utf-8"
    )
    (tmp_path / "categories.csv").write_text(
        "id,name,color\ncat-1,Groceries,red\n", encoding="utf-8"
    )
    (tmp_path / "transactions_cleaned.csv").write_text(
        "id,account_id,category_id,category,reference,amount,currency,date\n"
        "tx-1,acc-1,cat-1,Groceries,REF-42,-12.5,EUR,2021-03-04T00:00:00Z\n"
        "tx-2,acc-1,cat-1,Groceries,OTHER,3.0,EUR,2021-03-05T00:00:00Z\n",
        encoding="utf-8",
    )


@pytest.mark.asyncio
@pytest.mark.parametrize("source", [CopySource.SERVER, CopySource.CLIENT])
async def test_csv_seed_reports_rows_then_search(database, tmp_path, source):
    write_bank_export(tmp_path)

    async with database.session() as session:
        loaded = await seed_from_csv(session, tmp_path, source)
    assert loaded == {"accounts": 1, "categories": 1, "transactions": 2}

    data = await run(
        "{ allTransactions(searchAll: \"REF\") { id amount currency } }", database
    )
    assert data["allTransactions"] == [{"id": "tx-1", "amount": -12.5, "currency": "EUR"}]

    accounts = await run("{ allAccounts { id bank } }", database)
    assert accounts["allAccounts"] == [{"id": "acc-1", "bank": "Bank A"}]


@pytest.mark.asyncio
async def test_demo_category(database):
    async with database.session() as session:
        categories = await seed_demo_category(session)

    assert [(c.id, c.name, c.color) for c in categories] == [("1235", "Category 2", "green")]
    data = await run("{ allCategories { id name color } }", database)
    assert data["allCategories"] == [{"id": "1235", "name": "Category 2", "color": "green"}]
