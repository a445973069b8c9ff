from moprint.continuation import (
    ContinuationPolicy,
    Role,
    flatten_chain,
    is_continuation,
)
from moprint.tree import SyntaxNode, TreePath

OPERATORS = {'add': '+', 'mul': '*'}

# Binary nodes carry their precedence class as text.
POLICY = ContinuationPolicy(
    claiming_kinds=['paren'],
    boundary_kinds=['stmt'],
    transparent_kinds=['wrap'],
    conditional_kinds=['cond'],
    binary_kinds=['bin'],
    precedence_of=lambda node: node.text,
)


def operator_of(node):
    return OPERATORS[node.text]


def leaf(name):
    return SyntaxNode('id', text=name)


def node(kind, *children, text=None):
    return SyntaxNode(kind, children, text=text)


def add(left, right):
    return node('bin', left, right, text='add')


def mul(left, right):
    return node('bin', left, right, text='mul')


def path_to(root, *indices):
    path = TreePath.root(root)
    for index in indices:
        path = path.child(index)
    return path


def test_root_is_not_a_continuation():
    assert not is_continuation(TreePath.root(add(leaf('a'), leaf('b'))), POLICY)


def test_boundary_ancestor():
    root = node('stmt', add(leaf('a'), leaf('b')))
    assert not is_continuation(path_to(root, 0), POLICY)


def test_claiming_ancestor():
    root = node('stmt', node('paren', add(leaf('a'), leaf('b'))))
    assert is_continuation(path_to(root, 0, 0), POLICY)


def test_transparent_ancestors_are_skipped():
    root = node('stmt', node('paren', node('wrap', node('wrap', add(leaf('a'), leaf('b'))))))
    assert is_continuation(path_to(root, 0, 0, 0, 0), POLICY)

    root = node('stmt', node('wrap', add(leaf('a'), leaf('b'))))
    assert not is_continuation(path_to(root, 0, 0), POLICY)


def test_unknown_ancestor_is_a_boundary():
    root = node('paren', node('mystery', add(leaf('a'), leaf('b'))))
    assert not is_continuation(path_to(root, 0, 0), POLICY)


def test_same_precedence_binary_ancestor_claims():
    root = node('stmt', add(add(leaf('a'), leaf('b')), leaf('c')))
    assert is_continuation(path_to(root, 0, 0), POLICY)


def test_different_precedence_binary_ancestor_is_transparent():
    root = node('stmt', add(mul(leaf('a'), leaf('b')), leaf('c')))
    assert not is_continuation(path_to(root, 0, 0), POLICY)

    root = node('paren', add(mul(leaf('a'), leaf('b')), leaf('c')))
    assert is_continuation(path_to(root, 0, 0), POLICY)


def test_binary_ancestor_of_non_binary_node_is_transparent():
    root = node('stmt', add(node('paren', leaf('a')), leaf('b')))
    assert not is_continuation(path_to(root, 0, 0), POLICY)


def test_conditional_claims_branches_but_not_condition():
    root = node(
        'stmt',
        node(
            'cond',
            add(leaf('c'), leaf('d')),
            add(leaf('a'), leaf('b')),
            add(leaf('e'), leaf('f')),
        ),
    )
    assert not is_continuation(path_to(root, 0, 0), POLICY)
    assert is_continuation(path_to(root, 0, 1), POLICY)
    assert is_continuation(path_to(root, 0, 2), POLICY)


def test_classify():
    subject = add(leaf('a'), leaf('b'))
    assert POLICY.classify(node('paren'), 0, subject) is Role.CLAIMS
    assert POLICY.classify(node('stmt'), 0, subject) is Role.BOUNDARY
    assert POLICY.classify(node('wrap'), 0, subject) is Role.TRANSPARENT
    assert POLICY.classify(node('cond'), 0, subject) is Role.BOUNDARY
    assert POLICY.classify(node('cond'), 1, subject) is Role.CLAIMS
    assert POLICY.classify(add(leaf('x'), leaf('y')), 0, subject) is Role.CLAIMS
    assert POLICY.classify(mul(leaf('x'), leaf('y')), 0, subject) is Role.TRANSPARENT


def operand_texts(operands):
    return [POLICY.unwrap(path).node.text for path in operands]


def test_flatten_chain_left_nested():
    root = add(add(leaf('a'), leaf('b')), leaf('c'))
    operands, operators = flatten_chain(TreePath.root(root), POLICY, operator_of)
    assert operand_texts(operands) == ['a', 'b', 'c']
    assert operators == ['+', '+']


def test_flatten_chain_right_nested():
    root = add(leaf('a'), add(leaf('b'), leaf('c')))
    operands, operators = flatten_chain(TreePath.root(root), POLICY, operator_of)
    assert operand_texts(operands) == ['a', 'b', 'c']
    assert operators == ['+', '+']


def test_flatten_chain_stops_at_other_precedence():
    root = add(leaf('a'), mul(leaf('b'), leaf('c')))
    operands, operators = flatten_chain(TreePath.root(root), POLICY, operator_of)
    assert len(operands) == 2
    assert operands[1].node.text == 'mul'
    assert operators == ['+']


def test_flatten_chain_looks_through_wrappers_but_not_parens():
    root = add(node('wrap', add(leaf('a'), leaf('b'))), leaf('c'))
    operands, _ = flatten_chain(TreePath.root(root), POLICY, operator_of)
    assert operand_texts(operands) == ['a', 'b', 'c']

    root = add(node('paren', add(leaf('a'), leaf('b'))), leaf('c'))
    operands, _ = flatten_chain(TreePath.root(root), POLICY, operator_of)
    assert [path.node.kind for path in operands] == ['paren', 'id']


def test_flatten_chain_operand_paths_keep_their_parents():
    root = node('stmt', add(add(leaf('a'), leaf('b')), leaf('c')))
    operands, _ = flatten_chain(path_to(root, 0), POLICY, operator_of)
    assert [path.depth for path in operands] == [3, 3, 2]


def test_flatten_long_chain():
    root = leaf('x0')
    for i in range(1, 3000):
        root = add(root, leaf(f'x{i}'))
    operands, operators = flatten_chain(TreePath.root(root), POLICY, operator_of)
    assert len(operands) == 3000
    assert len(operators) == 2999
    assert operands[-1].node.text == 'x2999'
