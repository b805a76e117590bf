# bugvisits/services/involvement.py


def is_involved(bug, user, use_qa_contact: bool = True) -> bool:
    """
    True if `user` holds a role on `bug`: assignee, reporter, QA contact
    (only when the tracker uses QA contacts) or a cc list member.
    """
    if not getattr(user, "is_authenticated", False):
        return False
    user_id = getattr(user, "id", None)
    if not user_id:
        return False

    if user_id == bug.assigned_to_id or user_id == bug.reporter_id:
        return True
    if use_qa_contact and bug.qa_contact_id and user_id == bug.qa_contact_id:
        return True
    return user_id in bug.cc_user_ids
