"""Tests for videos, comments, tweets, playlists and the dashboard."""

import uuid

from fastapi import status

API = "/api/v1"


class TestVideoListing:
    """Test the public video feed."""

    def test_list_is_public_and_paginated(self, client, alice, create_video):
        for i in range(3):
            create_video(alice, title=f"Video {i}")

        response = client.get(f"{API}/videos", params={"page": 1, "limit": 2})

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["total_videos"] == 3
        assert data["total_pages"] == 2
        assert data["current_page"] == 1
        assert len(data["videos"]) == 2
        assert data["videos"][0]["owner"]["username"] == "alice"

    def test_unpublished_videos_are_hidden(self, client, alice, create_video):
        create_video(alice, title="Public")
        create_video(alice, title="Draft", is_published=False)

        data = client.get(f"{API}/videos").json()

        assert [v["title"] for v in data["videos"]] == ["Public"]

    def test_search_and_owner_filter(self, client, alice, bob, create_video):
        create_video(alice, title="Cooking pasta")
        create_video(alice, title="Gardening")
        create_video(bob, title="Cooking rice")

        by_query = client.get(f"{API}/videos", params={"query": "cooking"}).json()
        by_owner = client.get(f"{API}/videos", params={"query": "cooking", "user_id": alice["id"]}).json()

        assert by_query["total_videos"] == 2
        assert [v["title"] for v in by_owner["videos"]] == ["Cooking pasta"]

    def test_sort_by_title(self, client, alice, create_video):
        create_video(alice, title="Bravo")
        create_video(alice, title="Alpha")

        data = client.get(f"{API}/videos", params={"sort_by": "title", "sort_type": "asc"}).json()

        assert [v["title"] for v in data["videos"]] == ["Alpha", "Bravo"]

    def test_invalid_sort_field(self, client):
        response = client.get(f"{API}/videos", params={"sort_by": "password_hash"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_user_filter(self, client):
        response = client.get(f"{API}/videos", params={"user_id": "nope"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestVideoDetail:
    """Test fetching, editing and publishing a single video."""

    def test_view_counts_and_history(self, client, alice, bob, create_video):
        first = create_video(alice, title="First")
        second = create_video(alice, title="Second")

        client.get(f"{API}/videos/{first['id']}", headers=bob["headers"])
        client.get(f"{API}/videos/{second['id']}", headers=bob["headers"])
        detail = client.get(f"{API}/videos/{first['id']}", headers=bob["headers"]).json()

        assert detail["video"]["views"] == 2
        assert detail["total_likes"] == 0

        history = client.get(f"{API}/users/history", headers=bob["headers"]).json()
        assert [v["id"] for v in history] == [first["id"], second["id"]]

    def test_history_hides_other_peoples_drafts(self, client, alice, bob, create_video):
        video = create_video(alice)
        client.get(f"{API}/videos/{video['id']}", headers=bob["headers"])
        client.get(f"{API}/videos/{video['id']}", headers=alice["headers"])

        client.patch(f"{API}/videos/{video['id']}/publish", headers=alice["headers"])

        assert client.get(f"{API}/users/history", headers=bob["headers"]).json() == []
        own_history = client.get(f"{API}/users/history", headers=alice["headers"]).json()
        assert [v["id"] for v in own_history] == [video["id"]]

    def test_draft_visible_only_to_owner(self, client, alice, bob, create_video):
        draft = create_video(alice, is_published=False)

        assert client.get(f"{API}/videos/{draft['id']}", headers=bob["headers"]).status_code == 404
        assert client.get(f"{API}/videos/{draft['id']}", headers=alice["headers"]).status_code == 200

    def test_update_and_toggle_publish(self, client, alice, create_video):
        video = create_video(alice)

        updated = client.patch(
            f"{API}/videos/{video['id']}",
            json={"title": "<b>Renamed</b>"},
            headers=alice["headers"],
        )
        assert updated.json()["title"] == "Renamed"

        toggled = client.patch(f"{API}/videos/{video['id']}/publish", headers=alice["headers"])
        assert toggled.json()["is_published"] is False

    def test_missing_video(self, client, alice):
        response = client.get(f"{API}/videos/{uuid.uuid4()}", headers=alice["headers"])

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestComments:
    def test_add_and_list(self, client, alice, bob, create_video):
        video = create_video(alice)
        for text in ("one", "two", "three"):
            client.post(f"{API}/comments/video/{video['id']}", json={"content": text}, headers=bob["headers"])

        data = client.get(f"{API}/comments/video/{video['id']}", params={"limit": 2}).json()

        assert data["total_comments"] == 3
        assert data["total_pages"] == 2
        assert data["comments"][0]["content"] == "three"
        assert data["comments"][0]["owner"]["username"] == "bob"

    def test_comment_on_missing_video(self, client, bob):
        response = client.post(
            f"{API}/comments/video/{uuid.uuid4()}",
            json={"content": "Hello?"},
            headers=bob["headers"],
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestTweets:
    def test_create_and_list(self, client, alice, bob):
        client.post(f"{API}/tweets", json={"content": "From alice"}, headers=alice["headers"])
        client.post(f"{API}/tweets", json={"content": "From bob"}, headers=bob["headers"])

        everyone = client.get(f"{API}/tweets").json()
        alice_only = client.get(f"{API}/tweets/user/{alice['id']}", headers=bob["headers"]).json()

        assert everyone["total_tweets"] == 2
        assert [t["content"] for t in alice_only["tweets"]] == ["From alice"]

    def test_invalid_user_id(self, client, alice):
        response = client.get(f"{API}/tweets/user/xyz", headers=alice["headers"])

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestPlaylists:
    def test_playlist_lifecycle(self, client, alice, bob, create_video):
        video = create_video(bob)
        created = client.post(
            f"{API}/playlists",
            json={"name": "Watch later", "description": "Queue"},
            headers=alice["headers"],
        )
        assert created.status_code == status.HTTP_201_CREATED
        playlist_id = created.json()["id"]
        member_url = f"{API}/playlists/{playlist_id}/videos/{video['id']}"

        added = client.patch(member_url, headers=alice["headers"])
        assert added.json()["video_count"] == 1
        assert added.json()["videos"][0]["id"] == video["id"]

        duplicate = client.patch(member_url, headers=alice["headers"])
        assert duplicate.status_code == status.HTTP_409_CONFLICT

        listing = client.get(f"{API}/playlists", headers=alice["headers"]).json()
        assert listing["total_playlists"] == 1
        assert listing["playlists"][0]["video_count"] == 1

        renamed = client.patch(
            f"{API}/playlists/{playlist_id}",
            json={"name": "Later"},
            headers=alice["headers"],
        )
        assert renamed.json()["name"] == "Later"

        removed = client.delete(member_url, headers=alice["headers"])
        assert removed.json()["video_count"] == 0
        assert client.delete(member_url, headers=alice["headers"]).status_code == 404

        assert client.delete(f"{API}/playlists/{playlist_id}", headers=alice["headers"]).status_code == 200
        assert client.get(f"{API}/playlists/{playlist_id}", headers=alice["headers"]).status_code == 404

    def test_add_missing_video(self, client, alice):
        playlist = client.post(
            f"{API}/playlists",
            json={"name": "Empty", "description": "Nothing here"},
            headers=alice["headers"],
        ).json()

        response = client.patch(
            f"{API}/playlists/{playlist['id']}/videos/{uuid.uuid4()}",
            headers=alice["headers"],
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_requires_a_field(self, client, alice):
        playlist = client.post(
            f"{API}/playlists",
            json={"name": "Empty", "description": "Nothing here"},
            headers=alice["headers"],
        ).json()

        response = client.patch(f"{API}/playlists/{playlist['id']}", json={}, headers=alice["headers"])

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDashboard:
    def test_channel_stats(self, client, alice, bob, create_video):
        first = create_video(alice, title="First")
        create_video(alice, title="Draft", is_published=False)
        client.get(f"{API}/videos/{first['id']}", headers=bob["headers"])
        client.post(f"{API}/likes/toggle/v/{first['id']}", headers=bob["headers"])
        client.post(f"{API}/subscriptions/c/{alice['id']}", headers=bob["headers"])

        stats = client.get(f"{API}/dashboard/stats", headers=alice["headers"]).json()

        assert stats == {
            "total_videos": 2,
            "total_subscribers": 1,
            "total_views": 1,
            "total_likes": 1,
        }

    def test_channel_videos_include_drafts(self, client, alice, bob, create_video):
        published = create_video(alice, title="Published")
        create_video(alice, title="Draft", is_published=False)
        client.post(f"{API}/likes/toggle/v/{published['id']}", headers=bob["headers"])

        data = client.get(f"{API}/dashboard/videos", headers=alice["headers"]).json()

        assert data["total_videos"] == 2
        likes = {v["title"]: v["total_likes"] for v in data["videos"]}
        assert likes == {"Published": 1, "Draft": 0}

    def test_requires_authentication(self, client):
        assert client.get(f"{API}/dashboard/stats").status_code == status.HTTP_401_UNAUTHORIZED
