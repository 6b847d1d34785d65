import pytest
from fastapi.testclient import TestClient

from scanfix.main import app


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_results() -> dict:
    """A completed-scan ``results`` payload in the backend's format."""
    return {
        "code_analysis": [
            {
                "file": "C:\\work\\repo\\src/app.py",
                "original_code": "import os\npassword = 'hunter2'\nresult = eval(user_input)\nprint(result)",
                "static_analysis": {
                    "vulnerabilities": [
                        {"severity": "High", "description": "Use of eval detected", "line_numbers": [3]},
                        {"severity": "Critical", "description": "hardcoded password", "line_number": 2},
                    ]
                },
                "ai_analysis": "Two issues found. On line 3, the recommended fix is: `result = ast.literal_eval(user_input)`",
            },
            {
                "file": "src/clean.py",
                "original_code": "def add(a, b):\n    return a + b",
                "static_analysis": {"vulnerabilities": []},
                "ai_analysis": None,
            },
        ],
        "dependency_vulnerabilities": [
            {
                "package": "requests",
                "version": "2.19.0",
                "vulnerabilities": [
                    {"cve_id": "CVE-2018-18074", "severity": "HIGH", "description": "Credential leak on redirect"}
                ],
            }
        ],
        "summary": {
            "total_files_analyzed": 2,
            "total_vulnerabilities": 2,
            "critical_vulnerabilities": 1,
            "high_vulnerabilities": 1,
            "medium_vulnerabilities": 0,
            "low_vulnerabilities": 0,
        },
    }
