import json
import threading

import pytest

from app_shop.repositories import AuditRepository, ProductRepository, UserRepository


@pytest.fixture
def users(tmp_path):
    return UserRepository(str(tmp_path))


def test_files_are_created_empty(tmp_path):
    UserRepository(str(tmp_path))
    AuditRepository(str(tmp_path))

    assert json.loads((tmp_path / 'users.json').read_text()) == {}
    assert json.loads((tmp_path / 'audit.json').read_text()) == []


def test_create_user_rejects_duplicate_email(users):
    assert users.create_user('u1', {'email': 'a@x.com', 'cart': []})
    assert not users.create_user('u2', {'email': 'a@x.com', 'cart': []})

    assert list(users.list_users()) == ['u1']


def test_concurrent_signups_with_same_email_create_one_user(users):
    results = []

    def worker(i):
        results.append(users.create_user(f'u{i}', {'email': 'same@x.com', 'cart': []}))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len(users.list_users()) == 1


def test_merge_cart_line_increments_existing_line(users):
    users.create_user('u1', {'email': 'a@x.com', 'cart': []})

    users.merge_cart_line('u1', 'p1', 2)
    cart = users.merge_cart_line('u1', 'p1', 3)

    assert cart == [{'product': 'p1', 'quantity': 5}]


def test_merge_cart_line_unknown_user(users):
    assert users.merge_cart_line('ghost', 'p1', 1) is None


def test_concurrent_merges_lose_no_increments(users):
    users.create_user('u1', {'email': 'a@x.com', 'cart': []})

    def worker():
        for _ in range(10):
            users.merge_cart_line('u1', 'p1', 1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert users.find_by_id('u1')['cart'] == [{'product': 'p1', 'quantity': 80}]


def test_product_pid_lookup_update_and_delete(tmp_path):
    products = ProductRepository(str(tmp_path))
    assert products.create_product('x1', {'pID': 7, 'name': 'Tea', 'price': '3', 'quantity': 1})
    assert not products.create_product('x2', {'pID': 7, 'name': 'Copy', 'price': '3', 'quantity': 1})

    product_id, updated = products.update_by_pid(7, {'price': '4'})
    assert product_id == 'x1'
    assert updated['price'] == '4'
    assert updated['name'] == 'Tea'

    assert products.delete_by_pid(7)[0] == 'x1'
    assert products.delete_by_pid(7) is None
    assert products.find_by_pid(7) is None


def test_failed_transaction_writes_nothing(tmp_path):
    audit = AuditRepository(str(tmp_path))

    with pytest.raises(RuntimeError):
        with audit.transaction() as logs:
            logs.append({'message': 'partial'})
            raise RuntimeError('boom')

    assert audit.get_all() == []


def test_audit_log_is_newest_first_and_capped(tmp_path, monkeypatch):
    audit = AuditRepository(str(tmp_path))
    monkeypatch.setattr(AuditRepository, 'MAX_LOGS', 3)

    for i in range(5):
        audit.log('SISTEMA', 'x', f'evento {i}', timestamp=f'2024-01-01T00:00:0{i}+00:00')

    assert [log['message'] for log in audit.load()] == ['evento 4', 'evento 3', 'evento 2']
    assert len(audit.get_logs_by_type('SISTEMA')) == 3
    assert audit.get_logs_by_type('PRODUCTO') == []
