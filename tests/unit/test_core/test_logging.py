"""
Test Logging Filter
"""

import logging

from fluxradar.core.logging import PayloadFieldFilter

def _record(msg, args=()):
    return logging.LogRecord("fluxradar", logging.INFO, __file__, 1, msg, args, None)

def test_payload_resources_are_collapsed():
    """测试日志中的资源数组被折叠"""
    record = _record({"clusterName": "prod", "resources": [{"id": "a"}, {"id": "b"}]})

    assert PayloadFieldFilter().filter(record) is True
    assert record.msg == {"clusterName": "prod", "resources": "<resources count=2>"}

def test_nested_args_are_collapsed():
    """测试格式化参数中的嵌套数组同样折叠"""
    record = _record("payload=%s", ({"data": {"items": [1, 2, 3]}},))

    PayloadFieldFilter().filter(record)

    assert record.getMessage() == "payload={'data': {'items': '<items count=3>'}}"

def test_plain_messages_are_untouched():
    """测试普通字符串日志不受影响"""
    record = _record("集群快照已更新")

    PayloadFieldFilter().filter(record)

    assert record.getMessage() == "集群快照已更新"
