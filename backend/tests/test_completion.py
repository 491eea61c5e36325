from idp.schemas.response import ResponseData
from idp.services.completion import completed_count, is_fully_complete, progress


def test_completed_count_requires_level_and_non_blank_notes(reference):
    comps = reference.competencies_for_role(1)  # N = 4
    responses = {
        101: ResponseData(assessment_level=3, notes="solid"),
        102: ResponseData(assessment_level=4, notes="   "),
        103: ResponseData(notes="no rating yet"),
        104: ResponseData(assessment_level=2, notes="needs work"),
    }

    assert completed_count(responses, comps) == 2
    assert not is_fully_complete(responses, comps)


def test_fully_complete_when_every_competency_is_done(reference):
    comps = reference.competencies_for_role(1)
    responses = {c.competency_id: ResponseData(assessment_level=3, notes="n") for c in comps}

    assert completed_count(responses, comps) == 4
    assert is_fully_complete(responses, comps)


def test_responses_outside_the_role_do_not_count(reference):
    comps = reference.competencies_for_role(3)
    responses = {101: ResponseData(assessment_level=3, notes="other role")}

    assert completed_count(responses, comps) == 0


def test_role_without_competencies_is_never_complete():
    assert not is_fully_complete({}, [])


def test_progress_per_core_competency_group(reference):
    groups = reference.group_by_core_competency(1)
    responses = {
        101: ResponseData(assessment_level=3, notes="a"),
        103: ResponseData(assessment_level=3, notes="b"),
        104: ResponseData(assessment_level=3, notes="c"),
    }

    p = progress(responses, groups)
    assert (p.completed_count, p.total, p.is_fully_complete) == (3, 4, False)
    assert [(g.core_competency_id, g.completed, g.total) for g in p.groups] == [(10, 1, 2), (20, 2, 2)]


def test_response_data_completeness():
    assert ResponseData(assessment_level=1, notes="x").is_complete
    assert not ResponseData(assessment_level=1, notes=" ").is_complete
    assert not ResponseData(notes="x").is_complete
