from minirb.environment import Environment


def test_lookup_walks_outward():
    root = Environment()
    root.set('a', 1.0)
    child = root.child()
    grandchild = Environment(parent=child)
    assert grandchild.get('a') == 1.0
    assert 'a' in grandchild
    assert grandchild.resolve('a') is root


def test_set_binds_in_current_scope_only():
    root = Environment()
    root.set('a', 1.0)
    child = root.child()
    child.set('a', 2.0)
    assert child.get('a') == 2.0
    assert root.get('a') == 1.0
    assert child.resolve('a') is child


def test_last_write_wins():
    env = Environment()
    env.set('x', 1.0)
    env.set('x', 'one')
    assert env.get('x') == 'one'
    assert list(env.values) == ['x']


def test_unbound_reads_as_nil():
    env = Environment(parent=Environment())
    assert env.get('missing') is None
    assert 'missing' not in env
    assert env.resolve('missing') is None


def test_binding_to_nil_is_still_bound():
    env = Environment()
    env.set('n', None)
    assert 'n' in env


def test_depth():
    root = Environment()
    assert root.depth == 0
    assert root.child().child().depth == 2
