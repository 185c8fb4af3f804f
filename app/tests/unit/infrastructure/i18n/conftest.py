"""Feature-level fixtures for i18n system tests.

Provides translation directories and option fixtures for template
evaluation scenarios.
"""

import json

import pytest
import yaml

from infrastructure.i18n import BASE_OPTIONS, Locale, YAMLTranslationLoader


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create temporary directory with sample YAML translation files.

    Returns a directory structure like:
    - incident.en-US.yml
    - incident.fr-FR.yml
    - role.en-US.yml
    - role.fr-FR.yml
    """
    en_us_incident = {
        "incident": {
            "created": "Incident {{incident_id}} created",
            "resolved": "Incident {{incident_id}} resolved",
            "invalid_status": "Invalid status: {{status}}",
            "summary": "$t(incident:created) by {{-owner}}",
            "status": {"open": "Open", "closed": "Closed"},
            "responder": "A responder",
            "responder_plural": "{{count}} responders",
            "responder_lead": "The lead responder",
            "responder_lead_plural": "{{count}} lead responders",
            "loop": "$t(incident:loop)",
            "broken": "$t(incident:missing_key)",
        }
    }
    with open(tmp_path / "incident.en-US.yml", "w") as f:
        yaml.dump(en_us_incident, f)

    en_us_role = {
        "role": {
            "created": "Role {{role_name}} created",
            "deleted": "Role {{role_name}} deleted",
            "invalid_name": "Role names must start with 'role_'",
            "assigned": 'Assigned: $t(role:created, {"role_name": "role_admin"})',
        }
    }
    with open(tmp_path / "role.en-US.yml", "w") as f:
        yaml.dump(en_us_role, f)

    fr_fr_incident = {
        "incident": {
            "created": "Incident {{incident_id}} créé",
            "resolved": "Incident {{incident_id}} résolu",
            "invalid_status": "Statut invalide: {{status}}",
        }
    }
    with open(tmp_path / "incident.fr-FR.yml", "w") as f:
        yaml.dump(fr_fr_incident, f)

    fr_fr_role = {
        "role": {
            "created": "Rôle {{role_name}} créé",
            "deleted": "Rôle {{role_name}} supprimé",
            "invalid_name": "Les noms de rôle doivent commencer par 'role_'",
        }
    }
    with open(tmp_path / "role.fr-FR.yml", "w") as f:
        yaml.dump(fr_fr_role, f)

    return tmp_path


@pytest.fixture
def temp_json_translations_dir(tmp_path):
    """Create temporary directory with JSON translation bundles."""
    bundle = {"translation": {"greeting": "Hello {{name}}", "app": {"title": "Demo"}}}
    (tmp_path / "translation.en-US.json").write_text(json.dumps(bundle), "utf-8")
    return tmp_path


@pytest.fixture
def yaml_loader(temp_translations_dir):
    """Create YAMLTranslationLoader for temporary translations directory."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=False)


@pytest.fixture
def yaml_loader_with_cache(temp_translations_dir):
    """Create YAMLTranslationLoader with caching enabled."""
    return YAMLTranslationLoader(temp_translations_dir, use_cache=True)


@pytest.fixture
def base_options():
    """Library default options."""
    return BASE_OPTIONS


@pytest.fixture
def default_locale():
    return Locale.EN_US
