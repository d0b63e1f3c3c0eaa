class TestProfileAPI:
    def test_profile_counts_places_and_coins(
        self, client, make_place, sample_user, other_user, make_user, auth_headers, headers_for_user
    ):
        lake = make_place(sample_user, "Lake")
        fort = make_place(sample_user, "Fort")
        third = make_user("Meera", "meera@example.com")

        # two raters on one place must not double count the places
        for rater in (other_user, third):
            client.post(
                f"/api/places/{lake.id}/rate", json={"rating": 4}, headers=headers_for_user(rater)
            )
        client.post(
            f"/api/places/{fort.id}/rate", json={"rating": 5}, headers=headers_for_user(other_user)
        )

        resp = client.get("/api/profile/my-profile", headers=auth_headers)
        assert resp.status_code == 200, resp.text
        body = resp.json()
        assert body["user"] == {"id": sample_user.id, "name": "Asha", "email": "asha@example.com"}
        assert body["stats"] == {"placesPosted": 2, "coinsEarned": 130}
        # newest first
        assert [p["id"] for p in body["places"]] == [fort.id, lake.id]

    def test_new_user_has_empty_profile(self, client, auth_headers):
        body = client.get("/api/profile/my-profile", headers=auth_headers).json()
        assert body["stats"] == {"placesPosted": 0, "coinsEarned": 0}
        assert body["places"] == []

    def test_coins_for_ratings_four_and_five(
        self, client, sample_place, other_user, make_user, add_rating, auth_headers
    ):
        add_rating(other_user, sample_place, 4)
        add_rating(make_user("Meera", "meera@example.com"), sample_place, 5)

        body = client.get("/api/profile/my-profile", headers=auth_headers).json()
        assert body["stats"]["coinsEarned"] == 90
        assert body["stats"]["placesPosted"] == 1
