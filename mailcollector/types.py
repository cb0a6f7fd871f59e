from collections.abc import Mapping, Sequence
from typing import Any

MailSystemSetting = dict[str, str]
MessageRecord = Mapping[str, Any]
CapturedRecords = Sequence[MessageRecord]
Criteria = Mapping[str, str]
