from typing import List


def audit_actions(mock_uow) -> List[str]:
    """Actions of every AuditEvent passed to a mocked audit_events.create"""
    return [call.args[0].action for call in mock_uow.audit_events.create.call_args_list]
