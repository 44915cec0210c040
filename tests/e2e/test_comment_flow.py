"""End-to-end tests for comments and comment likes."""

from tests.harness import ADMIN_PASSWORD, create_client_fixture

client = create_client_fixture()

POST = "post1"


def add_comment(client, content: str, parent_id: str = "0") -> dict:
    response = client.post(
        "/api/comments",
        json={
            "postId": POST,
            "parentId": parent_id,
            "author": "Alice",
            "email": "alice@x.io",
            "content": content,
        },
    )
    assert response.status_code == 200
    return response.json()["data"]


def like_comment(client, user_id: str, comment_id: str) -> dict:
    response = client.post(
        "/api/like",
        json={
            "type": "comment",
            "action": "add",
            "userId": user_id,
            "postId": POST,
            "commentId": comment_id,
        },
    )
    assert response.status_code == 200
    return response.json()["data"]


def total_likes(client, comment_id: str) -> int:
    response = client.post(
        "/api/like",
        json={
            "type": "comment",
            "action": "get_total_count",
            "postId": POST,
            "commentId": comment_id,
        },
    )
    return response.json()["data"]["likesCount"]


class TestCommentFlow:
    """End-to-end tests for a comment thread's lifecycle."""

    def test_reply_is_nested_under_its_parent(self, client):
        # Act
        c1 = add_comment(client, "First")
        c2 = add_comment(client, "Reply", parent_id=c1["id"])
        response = client.get("/api/comments", params={"postId": POST})

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        comments = body["data"]["comments"]
        assert [(c["id"], c["floor"]) for c in comments] == [(c1["id"], 1)]
        children = comments[0]["children"]
        assert [(c["id"], c["floor"]) for c in children] == [(c2["id"], 1)]
        assert body["data"]["total"] == 2

    def test_likes_roll_up_and_deletion_rolls_back(self, client):
        c1 = add_comment(client, "First")
        c2 = add_comment(client, "Reply", parent_id=c1["id"])

        # alice likes the reply, twice
        first = like_comment(client, "alice", c2["id"])
        second = like_comment(client, "alice", c2["id"])
        assert (first["isNewLike"], first["directLikesCount"]) == (True, 1)
        assert first["totalLikesCount"] == 1
        assert (second["isNewLike"], second["directLikesCount"]) == (False, 1)
        assert total_likes(client, c1["id"]) == 1

        # bob likes the top-level comment
        bob = like_comment(client, "bob", c1["id"])
        assert (bob["directLikesCount"], bob["totalLikesCount"]) == (1, 2)

        # the admin removes the reply
        client.post(
            "/api/user",
            json={
                "action": "register",
                "username": "admin",
                "email": "admin@x.io",
                "password": ADMIN_PASSWORD,
            },
        )
        response = client.request(
            "DELETE",
            "/api/comments",
            json={"postId": POST, "commentId": c2["id"], "userId": "admin"},
        )
        assert response.status_code == 200
        assert response.json()["data"]["deletedIds"] == [c2["id"]]

        tree = client.get("/api/comments", params={"postId": POST}).json()["data"]
        assert tree["comments"][0]["children"] == []
        assert tree["comments"][0]["totalLikes"] == 1

    def test_liking_a_deleted_comment_is_gone(self, client):
        # Act
        response = client.post(
            "/api/like",
            json={
                "type": "comment",
                "userId": "alice",
                "postId": POST,
                "commentId": "missing",
            },
        )

        # Assert
        assert response.status_code == 410
        body = response.json()
        assert body["success"] is False
        assert body["ghostLike"] is True

    def test_non_admin_cannot_delete(self, client):
        c1 = add_comment(client, "First")

        # Act
        response = client.request(
            "DELETE",
            "/api/comments",
            json={"postId": POST, "commentId": c1["id"], "userId": "alice"},
        )

        # Assert
        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_edit_through_the_envelope(self, client):
        c1 = add_comment(client, "First")

        # Act
        response = client.post(
            "/api",
            json={
                "type": "comment",
                "action": "edit",
                "postId": POST,
                "commentId": c1["id"],
                "data": {"comment": "Edited"},
            },
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["data"]["comment"] == "Edited"

    def test_missing_content_is_rejected(self, client):
        response = client.post(
            "/api/comments", json={"postId": POST, "author": "Alice", "content": " "}
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
