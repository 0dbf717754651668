import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_model_backend, get_pdf_exporter, get_resume_store
from app.db.database import init_db, make_engine
from app.services.resume_service import ResumeStore
from main import app


class FakeBackend:
    """Model backend double: canned response per flow name, every request recorded."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    async def generate(self, request):
        self.calls.append(request)
        response = self.responses.get(request.name)
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(request)
        return response

    def calls_for(self, name):
        return [c for c in self.calls if c.name == name]


SAMPLE_CONTENT = {
    "personalInfo": {
        "name": "Jane Doe",
        "addressLines": ["1 Main St", "Springfield"],
        "contact": {
            "email": "jane@example.com",
            "phone": "555-0100",
            "github": "https://github.com/janedoe",
        },
    },
    "aboutMe": "Backend engineer who likes clean APIs.",
    "education": "BSc Computer Science, State University",
    "skills": "Python, FastAPI, SQL",
    "softSkills": "Mentoring, communication",
    "projects": "Built a resume studio.",
    "achievements": "Hackathon winner 2023",
}

BUILDER_FORM = {
    "personalInfo": "Jane Doe\n1 Main St\njane@example.com",
    "aboutMe": "I build APIs.",
    "education": "BSc CS",
    "skills": "Python",
    "softSkills": "Teamwork",
}


@pytest.fixture
def sample_content():
    return {**SAMPLE_CONTENT, "personalInfo": {**SAMPLE_CONTENT["personalInfo"]}}


@pytest.fixture
def builder_form():
    return dict(BUILDER_FORM)


@pytest.fixture
def store(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'resumes.db'}")
    init_db(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield ResumeStore(session_factory=factory)
    engine.dispose()


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def exporter_calls():
    return []


@pytest.fixture
def client(store, backend, exporter_calls):
    async def fake_exporter(html):
        exporter_calls.append(html)
        return b"%PDF-1.4 fake"

    app.dependency_overrides[get_resume_store] = lambda: store
    app.dependency_overrides[get_model_backend] = lambda: backend
    app.dependency_overrides[get_pdf_exporter] = lambda: fake_exporter
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_backend():
    return FakeBackend
