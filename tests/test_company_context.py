"""Tests for company context prompt building"""
from src.eventra.models.company_intelligence import CompanyIntelligence
from src.eventra.services.company_context import (
    build_system_prompt, create_system_prompt, format_company_context_prompt, save_company_intelligence,
    DEFAULT_BASE_PROMPT,
)


def test_empty_profile_adds_nothing():
    assert format_company_context_prompt(None) == ""
    assert format_company_context_prompt(CompanyIntelligence(user_id="u1")) == ""
    assert create_system_prompt(None) == DEFAULT_BASE_PROMPT


def test_context_lines():
    intel = CompanyIntelligence(
        user_id="u1",
        company_description="Badge scanners",
        core_products=["Scanner", "App"],
        primary_business_goal="pipeline",
        icp_data={"companySizes": ["50-200"], "jobTitles": []},
        typical_deal_size_min=5000,
    )
    context = format_company_context_prompt(intel)
    lines = context.split("\n")
    assert lines[0] == "Company Context:"
    assert "Products/Services: Scanner, App" in lines
    assert "Primary Business Goal: Pipeline Generation" in lines
    assert "ICP Company Sizes: 50-200" in lines
    assert "Typical Deal Size: $5,000 - no upper limit" in lines
    assert not any(line.startswith("ICP Job Titles") for line in lines)


def test_system_prompt_wraps_base():
    intel = CompanyIntelligence(user_id="u1", company_description="Badge scanners", primary_business_goal="revenue")
    prompt = create_system_prompt(intel, "You are a lead analyst.")
    assert prompt.startswith("You are a lead analyst.\n\nCompany Context:")
    assert prompt.endswith("align with the company's revenue goal.")


def test_build_uses_saved_profile(db, user):
    assert build_system_prompt(db, user.id, "Base") == "Base"
    assert build_system_prompt(db, None, "Base") == "Base"

    save_company_intelligence(db, user.id, company_description="Badge scanners")
    db.commit()
    assert "Company: Badge scanners" in build_system_prompt(db, user.id, "Base")
