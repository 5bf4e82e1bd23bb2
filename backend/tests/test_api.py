"""
End-to-end tests through the HTTP API.
"""
import asyncio
import unittest

from fastapi.testclient import TestClient

from gymdir.auth.jwt import create_access_token
from gymdir.database import async_session_maker
from gymdir.domain.entities import OperatingHours, TimeRange
from gymdir.main import app
from gymdir.repositories.gym_index import SqlGymIndex
from gymdir.services.gym_service import GymService
from gymdir.utils.locks import KeyedLock

from support import ALICE, BOB, FixedGeoLocator, make_address, make_gym_request, reset_db


async def store_gym(request):
    """Create a gym through the service layer, skipping request validation."""
    async with async_session_maker() as session:
        service = GymService(SqlGymIndex(session), FixedGeoLocator(), KeyedLock())
        return await service.create_gym(request)


def gym_payload(name="Iron Forge Fitness", gym_type="Fitnessstudio", **overrides):
    payload = {
        "name": name,
        "gymType": gym_type,
        "contactInformation": "+49 40 1234567",
        "address": {
            "streetNumber": "12",
            "streetName": "Reeperbahn",
            "city": "Hamburg",
            "state": "Hamburg",
            "postalCode": "20359",
            "country": "Germany",
        },
        "operatingHours": {
            "monday": {"openTime": "06:00", "closeTime": "23:00"},
        },
        "photoIds": ["image1.jpg"],
    }
    payload.update(overrides)
    return payload


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        asyncio.run(reset_db())
        self.client = TestClient(app)
        self.alice = {"Authorization": f"Bearer {create_access_token(ALICE)}"}
        self.bob = {"Authorization": f"Bearer {create_access_token(BOB)}"}

    def create_gym(self, **kwargs):
        response = self.client.post("/api/gyms", json=gym_payload(**kwargs), headers=self.alice)
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()


class TestHealth(ApiTestCase):

    def test_health(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "healthy"})

    def test_error_body_documented(self):
        schema = app.openapi()
        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        responses = schema["paths"]["/api/gyms/{gym_id}"]["get"]["responses"]
        self.assertEqual(
            responses["404"]["content"]["application/json"]["schema"]["$ref"],
            "#/components/schemas/ErrorResponse",
        )


class TestGymsApi(ApiTestCase):

    def test_create_requires_token(self):
        response = self.client.post("/api/gyms", json=gym_payload())
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()["status"], 401)

    def test_invalid_token(self):
        response = self.client.post(
            "/api/gyms", json=gym_payload(), headers={"Authorization": "Bearer not-a-token"}
        )
        self.assertEqual(response.status_code, 401)

    def test_create_and_get(self):
        created = self.create_gym()
        self.assertEqual(created["name"], "Iron Forge Fitness")
        self.assertEqual(created["gymType"], "Fitnessstudio")
        self.assertEqual(created["averageRating"], 0.0)
        self.assertEqual(created["totalReviews"], 0)
        self.assertEqual(created["reviews"], [])
        self.assertIn("lat", created["geoLocation"])

        response = self.client.get(f"/api/gyms/{created['id']}")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["address"]["streetName"], "Reeperbahn")
        self.assertEqual(body["operatingHours"]["monday"]["openTime"], "06:00")
        self.assertEqual(body["photos"][0]["url"], "image1.jpg")
        self.assertEqual(body["averageRating"], 0.0)
        self.assertEqual(body["totalReviews"], 0)
        self.assertEqual(body["reviews"], [])

    def test_reads_render_stored_gyms_without_input_rules(self):
        gym = asyncio.run(store_gym(make_gym_request(
            address=make_address(street_number="12-14"),
            operating_hours=OperatingHours(monday=TimeRange(open_time="6am", close_time="late")),
        )))

        response = self.client.get(f"/api/gyms/{gym.id}")
        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["address"]["streetNumber"], "12-14")
        self.assertEqual(body["operatingHours"]["monday"]["openTime"], "6am")

        response = self.client.get("/api/gyms")
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual([g["id"] for g in response.json()["content"]], [gym.id])

    def test_get_unknown(self):
        response = self.client.get("/api/gyms/missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.json(), {"status": 404, "message": "the specific gym wasn't found"}
        )

    def test_validation_errors(self):
        payload = gym_payload(name=" ", photoIds=[])
        payload["address"]["streetNumber"] = "12-14"
        response = self.client.post("/api/gyms", json=payload, headers=self.alice)
        self.assertEqual(response.status_code, 400)
        body = response.json()
        self.assertEqual(body["status"], 400)
        self.assertIn("name: ", body["message"])
        self.assertIn("address.streetNumber: ", body["message"])
        self.assertIn("photoIds: ", body["message"])

    def test_update_and_delete(self):
        created = self.create_gym()
        response = self.client.put(
            f"/api/gyms/{created['id']}",
            json=gym_payload(name="Iron Forge Altona"),
            headers=self.alice,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["name"], "Iron Forge Altona")

        response = self.client.delete(f"/api/gyms/{created['id']}", headers=self.alice)
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(f"/api/gyms/{created['id']}").status_code, 404)

    def test_search_pages_are_one_based(self):
        for name in ("Alpha Gym", "Beta Gym", "Gamma Gym"):
            self.create_gym(name=name)

        response = self.client.get("/api/gyms", params={"page": 1, "size": 2})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual([g["name"] for g in body["content"]], ["Alpha Gym", "Beta Gym"])
        self.assertEqual(body["totalElements"], 3)
        self.assertEqual(body["totalPages"], 2)

        body = self.client.get("/api/gyms", params={"page": 2, "size": 2}).json()
        self.assertEqual([g["name"] for g in body["content"]], ["Gamma Gym"])

        self.assertEqual(self.client.get("/api/gyms", params={"page": 0}).status_code, 400)

    def test_search_by_query_and_rating(self):
        self.create_gym(name="Zen Flow Yoga Studio", gym_type="Yoga")
        self.create_gym(name="Elb CrossFit Center", gym_type="CrossFit")

        body = self.client.get("/api/gyms", params={"query": "crossfti"}).json()
        self.assertEqual([g["name"] for g in body["content"]], ["Elb CrossFit Center"])

        body = self.client.get("/api/gyms", params={"query": "", "minRating": 4.5}).json()
        self.assertEqual(body["totalElements"], 0)


class TestReviewsApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.gym = self.create_gym()
        self.base = f"/api/gyms/{self.gym['id']}/reviews"

    def post_review(self, headers, rating=5, content="Great equipment"):
        return self.client.post(self.base, json={"content": content, "rating": rating}, headers=headers)

    def test_create_list_get(self):
        response = self.post_review(self.alice, rating=4)
        self.assertEqual(response.status_code, 201, response.text)
        review = response.json()
        self.assertEqual(review["rating"], 4)
        self.assertEqual(review["writtenBy"]["id"], ALICE.id)
        self.assertEqual(review["writtenBy"]["givenName"], "Alice")
        self.assertEqual(review["datePosted"], review["lastEdited"])

        body = self.client.get(self.base).json()
        self.assertEqual(body["totalElements"], 1)
        self.assertEqual(body["content"][0]["id"], review["id"])

        response = self.client.get(f"{self.base}/{review['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["content"], "Great equipment")

        gym = self.client.get(f"/api/gyms/{self.gym['id']}").json()
        self.assertEqual(gym["averageRating"], 4.0)
        self.assertEqual(gym["totalReviews"], 1)

    def test_requires_token(self):
        self.assertEqual(self.post_review({}).status_code, 401)

    def test_duplicate_review(self):
        self.post_review(self.alice)
        response = self.post_review(self.alice)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {
            "status": 400,
            "message": f"author with id {ALICE.id} already wrote a review",
        })

    def test_rating_bounds(self):
        response = self.post_review(self.alice, rating=6)
        self.assertEqual(response.status_code, 400)
        self.assertTrue(response.json()["message"].startswith("rating: "))

    def test_sorted_listing(self):
        self.post_review(self.alice, rating=2)
        self.post_review(self.bob, rating=5)

        body = self.client.get(self.base, params={"sort": "rating,desc"}).json()
        self.assertEqual([r["rating"] for r in body["content"]], [5, 2])

        body = self.client.get(self.base, params={"sort": "rating,asc"}).json()
        self.assertEqual([r["rating"] for r in body["content"]], [2, 5])

        body = self.client.get(self.base, params={"page": 3}).json()
        self.assertEqual(body["content"], [])
        self.assertEqual(body["totalElements"], 2)

    def test_edit_own_review(self):
        review = self.post_review(self.alice, rating=2).json()

        response = self.client.put(
            f"{self.base}/{review['id']}",
            json={"content": "Better now", "rating": 4},
            headers=self.alice,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["content"], "Better now")

        response = self.client.put(
            f"{self.base}/{review['id']}",
            json={"content": "Not mine", "rating": 1},
            headers=self.bob,
        )
        self.assertEqual(response.status_code, 400)

    def test_unknown_review(self):
        response = self.client.get(f"{self.base}/missing")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "the specific review wasn't found")

    def test_unknown_gym(self):
        response = self.client.get("/api/gyms/missing/reviews")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "the specific gym wasn't found")


class TestPhotosApi(ApiTestCase):

    def test_upload_and_fetch(self):
        response = self.client.post(
            "/api/photos",
            files={"file": ("front.JPG", b"\xff\xd8\xff fake jpeg", "image/jpeg")},
            headers=self.alice,
        )
        self.assertEqual(response.status_code, 200, response.text)
        photo = response.json()
        self.assertTrue(photo["url"].endswith(".jpg"))
        self.assertIn("uploadDate", photo)

        response = self.client.get(f"/api/photos/{photo['url']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"\xff\xd8\xff fake jpeg")
        self.assertEqual(response.headers["content-type"], "image/jpeg")
        self.assertTrue(response.headers["content-disposition"].startswith("inline"))

    def test_upload_requires_token(self):
        response = self.client.post(
            "/api/photos", files={"file": ("front.jpg", b"data", "image/jpeg")}
        )
        self.assertEqual(response.status_code, 401)

    def test_empty_upload(self):
        response = self.client.post(
            "/api/photos", files={"file": ("front.jpg", b"", "image/jpeg")}, headers=self.alice
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json()["message"], "unable to save or retrieve resources at this time"
        )

    def test_unknown_photo(self):
        response = self.client.get("/api/photos/missing.jpg")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"status": 404, "message": "Photo not found"})


if __name__ == "__main__":
    unittest.main()
