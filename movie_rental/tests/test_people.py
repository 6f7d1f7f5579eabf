from datetime import date, timedelta

from movie_rental.app import models


def test_list_people_is_public_and_counts_credits(client, catalog):
    response = client.get("/people")
    assert response.status_code == 200
    data = response.json()

    names = [person["full_name"] for person in data]
    assert names == sorted(names)
    nolan = next(person for person in data if person["full_name"] == "Christopher Nolan")
    assert nolan["movies_as_actor"] == 0
    assert nolan["movies_as_crew"] == 2
    hardy = next(person for person in data if person["full_name"] == "Tom Hardy")
    assert hardy["movies_as_actor"] == 2


def test_search_people_by_name(client, catalog):
    response = client.get("/people", params={"search": "LEO"})
    assert response.status_code == 200
    assert [person["full_name"] for person in response.json()] == ["Leonardo DiCaprio"]


def test_person_details_list_filmography_newest_first(client, catalog):
    nolan = catalog["people"]["nolan"]
    response = client.get(f"/people/{nolan.id}")
    assert response.status_code == 200
    data = response.json()

    assert data["bio"] == "Director."
    assert data["age"] == models.Person(birth_date=date(1970, 7, 30)).age
    assert [(role["movie_title"], role["role"]) for role in data["movies_as_crew"]] == [
        ("Inception", "Director"),
        ("Inception", "Writer"),
        ("The Dark Knight", "Director"),
    ]
    assert data["movies_as_actor"] == []

    hardy = catalog["people"]["hardy"]
    acting = client.get(f"/people/{hardy.id}").json()["movies_as_actor"]
    assert [role["release_year"] for role in acting] == [2010, 2008]


def test_person_details_missing_person(client):
    assert client.get("/people/424242").status_code == 404


def test_age_is_whole_years():
    today = date.today()
    birthday_tomorrow = today.replace(year=today.year - 30) + timedelta(days=1)

    assert models.Person(birth_date=None).age is None
    assert models.Person(birth_date=today.replace(year=today.year - 30)).age == 30
    assert models.Person(birth_date=birthday_tomorrow).age == 29


def test_admin_manages_people(client, admin_headers, customer_headers):
    payload = {"full_name": "Zoë O'Neil-Smith Jr.", "birth_date": "1980-05-01", "bio": "Actor."}
    assert client.post("/people", json=payload).status_code == 401
    assert client.post("/people", json=payload, headers=customer_headers).status_code == 403

    response = client.post("/people", json={**payload, "full_name": "Noël O'Neil-Smith Jr."}, headers=admin_headers)
    assert response.status_code == 422

    response = client.post(
        "/people",
        json={**payload, "full_name": "José O'Neil-Smith Jr."},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.json()
    person_id = response.json()["id"]

    update = client.put(
        f"/people/{person_id}",
        json={"full_name": "José Smith", "bio": None},
        headers=admin_headers,
    )
    assert update.status_code == 200
    assert update.json()["full_name"] == "José Smith"
    assert update.json()["birth_date"] is None

    assert client.delete(f"/people/{person_id}", headers=admin_headers).status_code == 204
    assert client.get(f"/people/{person_id}").status_code == 404


def test_person_validation(admin_client):
    tomorrow = (date.today() + timedelta(days=1)).isoformat()
    invalid = [
        {"full_name": ""},
        {"full_name": "R2-D2"},
        {"full_name": "x" * 151},
        {"full_name": "Old Timer", "birth_date": "1850-01-01"},
        {"full_name": "Future Kid", "birth_date": tomorrow},
        {"full_name": "Long Bio", "bio": "a" * 2001},
    ]
    for payload in invalid:
        response = admin_client.post("/people", json=payload)
        assert response.status_code == 422, payload


def test_person_with_credits_cannot_be_deleted(admin_client, catalog):
    nolan = catalog["people"]["nolan"]
    response = admin_client.delete(f"/people/{nolan.id}")
    assert response.status_code == 409

    freeman = catalog["people"]["freeman"]
    assert admin_client.delete(f"/people/{freeman.id}").status_code == 204
