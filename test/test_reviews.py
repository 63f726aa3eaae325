from conftest import sign_in
from storefront.models import ProductQuestion


def test_reviews_newest_first(client, catalog):
    for rating in (4, 5):
        response = client.post(f"/api/products/{catalog['table']}/reviews", json={
            "userName": "Asha", "rating": rating, "comment": "Sturdy and beautiful"})
        assert response.status_code == 200

    reviews = client.get(f"/api/products/{catalog['table']}/reviews").json()
    assert [r["rating"] for r in reviews] == [5, 4]
    assert reviews[0]["userId"] is None


def test_review_links_session_user(client, catalog):
    user = sign_in(client)
    review = client.post(f"/api/products/{catalog['table']}/reviews", json={
        "userName": "Asha", "rating": 5, "comment": "Lovely"}).json()
    assert review["userId"] == user["id"]


def test_review_validation(client, catalog):
    out_of_range = client.post(f"/api/products/{catalog['table']}/reviews", json={
        "userName": "Asha", "rating": 6, "comment": "Too good"})
    assert out_of_range.status_code == 400

    unknown = client.post("/api/products/9999/reviews", json={"userName": "Asha", "rating": 5, "comment": "?"})
    assert unknown.status_code == 404


def test_questions_and_answers(client, catalog, db):
    asked = client.post(f"/api/products/{catalog['chairs']}/questions", json={
        "userName": "Ravi", "userEmail": "ravi@indosaga.in", "question": "Is the wood treated?"})
    assert asked.status_code == 200
    question = asked.json()
    assert question["answer"] is None

    answered = client.put(f"/api/products/questions/{question['id']}", json={
        "answer": "Yes, with natural oils.", "answeredBy": "IndoSaga Team"})
    assert answered.status_code == 200
    assert answered.json()["answeredAt"] is not None

    questions = client.get(f"/api/products/{catalog['chairs']}/questions").json()
    assert [q["answer"] for q in questions] == ["Yes, with natural oils."]


def test_hidden_questions_are_not_listed(client, catalog):
    question = client.post(f"/api/products/{catalog['chairs']}/questions", json={
        "userName": "Ravi", "question": "Discount?"}).json()
    client.put(f"/api/products/questions/{question['id']}", json={"isPublic": False})
    assert client.get(f"/api/products/{catalog['chairs']}/questions").json() == []


def test_answering_missing_question_is_404(client):
    assert client.put("/api/products/questions/999", json={"answer": "n/a"}).status_code == 404
