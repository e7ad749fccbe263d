#!/usr/bin/env python3
"""
依赖图构建器

分析每条顶层语句定义(def)和使用(use)的变量，构建"语句 -> 变量 -> 语句"依赖图：
    语句p 定义变量v:  StatementNode(p) -> ValueNode(v)
    语句p 使用变量v:  ValueNode(v) -> StatementNode(p)   (仅当v在p之前已被定义)
函数体在调用时才求值，其中的自由变量在之后才被定义时，同样连到函数定义语句。
"""

import logging
from typing import Dict, Iterable, List, Set, Tuple

from .base import BaseAnalyzer, DEFAULT_SKIP_NODE_TYPES, text
from .graph import DependencyGraph
from .node import StatementNode, ValueNode
from .script import Script, read_script

logger = logging.getLogger(__name__)

COMPREHENSION_TYPES = {
    'list_comprehension', 'set_comprehension',
    'dictionary_comprehension', 'generator_expression'
}

# 赋值目标中可以展开的容器模式
PATTERN_TYPES = {
    'pattern_list', 'tuple_pattern', 'list_pattern', 'tuple', 'list',
    'parenthesized_expression', 'list_splat_pattern', 'list_splat'
}


class ScriptGraphBuilder(BaseAnalyzer):
    """Python脚本依赖图构建器"""

    def __init__(self, skip_node_types: Iterable[str] = DEFAULT_SKIP_NODE_TYPES):
        super().__init__(skip_node_types)
        # 当前语句中函数体/lambda体的自由变量
        self._deferred: Set[str] = set()

    def build(self, script: Script) -> DependencyGraph:
        """
        构建依赖图

        变量节点按名字区分，同名变量的多次定义共用一个节点：
        之后的重新定义也会出现在早先值的切片中，切片不一定最小。

        Args:
            script: 脚本对象
        Returns:
            DependencyGraph
        """
        graph = DependencyGraph()
        defined: Set[str] = set()
        # 变量名 -> 在函数体中使用该变量、但当时尚未定义它的语句
        pending: Dict[str, List[StatementNode]] = {}

        for position, statement in enumerate(script.statements, 1):
            stmt_node = graph.add_node(StatementNode(position))
            defs, uses, deferred = self.analyze(statement)

            for name in sorted(uses):
                if name in defined:
                    graph.add_edge(ValueNode(name), stmt_node)
                elif name in deferred:
                    pending.setdefault(name, []).append(stmt_node)
            for name in sorted(defs):
                graph.add_edge(stmt_node, ValueNode(name))
                for waiting in pending.pop(name, []):
                    if waiting != stmt_node:
                        graph.add_edge(ValueNode(name), waiting)
            defined.update(defs)

        logger.info(f"依赖图构建完成: {graph!r}")
        return graph

    def def_use(self, statement: str) -> Tuple[Set[str], Set[str]]:
        """获取一条语句定义和使用的变量集合"""
        defs, uses, _ = self.analyze(statement)
        return defs, uses

    def analyze(self, statement: str) -> Tuple[Set[str], Set[str], Set[str]]:
        """
        分析一条语句
        Returns:
            (定义的变量, 使用的变量, 其中只在函数体中使用、调用时才求值的变量)
        """
        defs, uses, local = set(), set(), set()
        self._deferred = set()
        root = self.parse_code(statement)
        for node in self.find_statements(root):
            self._walk(node, defs, uses, local)
        uses -= local
        return defs, uses, self._deferred & uses

    def imports(self, script: Script) -> List[str]:
        """列出脚本导入的模块名，按首次出现的顺序"""
        modules = []
        for statement in script.statements:
            root = self.parse_code(statement)
            for node in self.find_statements(root):
                for name in self._imported_modules(node):
                    if name not in modules:
                        modules.append(name)
        return modules

    def _imported_modules(self, node) -> List[str]:
        if node.type == 'import_statement':
            names = []
            for name in node.children_by_field_name('name'):
                if name.type == 'aliased_import':
                    name = name.child_by_field_name('name')
                names.append(text(name))
            return names
        if node.type == 'import_from_statement':
            module = node.child_by_field_name('module_name')
            return [text(module)] if module else []
        return []

    def _walk(self, node, defs: Set[str], uses: Set[str], local: Set[str]):
        """递归收集节点中的定义和使用"""
        t = node.type

        if t == 'comment':
            return
        if t == 'identifier':
            uses.add(text(node))
            return
        if t == 'attribute':
            # 只有对象部分是变量，属性名不是
            self._walk(node.child_by_field_name('object'), defs, uses, local)
            return
        if t == 'keyword_argument':
            self._walk_field(node, 'value', defs, uses, local)
            return
        if t == 'assignment':
            self._bind(node.child_by_field_name('left'), defs, uses, local)
            self._walk_field(node, 'type', defs, uses, local)
            self._walk_field(node, 'right', defs, uses, local)
            return
        if t == 'augmented_assignment':
            left = node.child_by_field_name('left')
            self._walk(left, defs, uses, local)
            self._bind(left, defs, uses, local)
            self._walk_field(node, 'right', defs, uses, local)
            return
        if t == 'named_expression':
            self._bind(node.child_by_field_name('name'), defs, uses, local)
            self._walk_field(node, 'value', defs, uses, local)
            return
        if t == 'for_statement':
            self._bind(node.child_by_field_name('left'), defs, uses, local)
            for field_name in ('right', 'body', 'alternative'):
                self._walk_field(node, field_name, defs, uses, local)
            return
        if t in COMPREHENSION_TYPES:
            # 推导式变量只在推导式内部有效，海象运算符仍绑定到外层
            inner_uses, inner_local = set(), set()
            for child in node.named_children:
                self._walk(child, defs, inner_uses, inner_local)
            uses.update(inner_uses - inner_local)
            return
        if t == 'for_in_clause':
            self._bind(node.child_by_field_name('left'), local, uses, local)
            self._walk_field(node, 'right', defs, uses, local)
            return
        if t == 'as_pattern':
            alias = node.child_by_field_name('alias')
            for child in node.named_children:
                if child != alias:
                    self._walk(child, defs, uses, local)
            if alias is not None:
                self._bind(alias, defs, uses, local)
            return
        if t in ('import_statement', 'import_from_statement'):
            defs.update(self._imported_names(node))
            return
        if t == 'lambda':
            params = set()
            parameters = node.child_by_field_name('parameters')
            if parameters is not None:
                self._collect_parameters(parameters, params, defs, uses, local)
            body_uses = set()
            self._walk_field(node, 'body', set(), body_uses, local)
            free = body_uses - params
            uses.update(free)
            self._deferred.update(free)
            return
        if t == 'function_definition':
            self._walk_function(node, defs, uses, local)
            return
        if t == 'class_definition':
            self._walk_class(node, defs, uses, local)
            return

        for child in node.named_children:
            self._walk(child, defs, uses, local)

    def _walk_field(self, node, field_name: str, defs, uses, local):
        child = node.child_by_field_name(field_name)
        if child is not None:
            self._walk(child, defs, uses, local)

    def _walk_function(self, node, defs, uses, local):
        """函数定义：函数名为定义，函数体中的自由变量为使用"""
        name = node.child_by_field_name('name')
        if name is not None:
            defs.add(text(name))

        params = set()
        parameters = node.child_by_field_name('parameters')
        if parameters is not None:
            # 默认值和类型注解在外层作用域求值
            self._collect_parameters(parameters, params, defs, uses, local)
        self._walk_field(node, 'return_type', defs, uses, local)

        inner_defs, inner_uses, inner_local = set(), set(), set()
        self._walk_field(node, 'body', inner_defs, inner_uses, inner_local)
        free = inner_uses - inner_defs - inner_local - params
        uses.update(free)
        self._deferred.update(free)

    def _walk_class(self, node, defs, uses, local):
        name = node.child_by_field_name('name')
        if name is not None:
            defs.add(text(name))
        self._walk_field(node, 'superclasses', defs, uses, local)

        inner_defs, inner_uses, inner_local = set(), set(), set()
        self._walk_field(node, 'body', inner_defs, inner_uses, inner_local)
        uses.update(inner_uses - inner_defs - inner_local)

    def _collect_parameters(self, parameters, params: Set[str], defs, uses, local):
        """收集形参名，默认值与类型注解作为外层的使用"""
        for child in parameters.named_children:
            t = child.type
            if t == 'identifier':
                params.add(text(child))
            elif t in ('default_parameter', 'typed_default_parameter'):
                name = child.child_by_field_name('name')
                if name is not None:
                    params.update(self._identifiers(name))
                self._walk_field(child, 'type', defs, uses, local)
                self._walk_field(child, 'value', defs, uses, local)
            elif t == 'typed_parameter':
                for sub in child.named_children:
                    if sub.type == 'type':
                        self._walk(sub, defs, uses, local)
                    else:
                        params.update(self._identifiers(sub))
            elif t in ('list_splat_pattern', 'dictionary_splat_pattern'):
                params.update(self._identifiers(child))

    def _bind(self, target, defs: Set[str], uses: Set[str], local: Set[str]):
        """处理赋值目标：标识符为定义；属性/下标赋值同时使用并定义其根对象"""
        if target is None:
            return
        t = target.type
        if t == 'identifier':
            defs.add(text(target))
        elif t in PATTERN_TYPES:
            for child in target.named_children:
                self._bind(child, defs, uses, local)
        elif t in ('attribute', 'subscript'):
            self._walk(target, set(), uses, local)
            root = self._root_object(target)
            if root is not None:
                defs.add(text(root))
        elif t == 'as_pattern_target':
            for child in target.named_children:
                self._bind(child, defs, uses, local)
        else:
            self._walk(target, defs, uses, local)

    def _root_object(self, node):
        while node is not None and node.type in ('attribute', 'subscript'):
            field_name = 'object' if node.type == 'attribute' else 'value'
            node = node.child_by_field_name(field_name)
        if node is not None and node.type == 'identifier':
            return node
        return None

    def _imported_names(self, node) -> Set[str]:
        """import语句绑定的名字"""
        names = set()
        for name in node.children_by_field_name('name'):
            if name.type == 'aliased_import':
                alias = name.child_by_field_name('alias')
                names.add(text(alias))
            elif node.type == 'import_statement':
                # import a.b 绑定的是 a
                names.add(text(name).split('.')[0])
            else:
                names.add(text(name))
        return names

    def _identifiers(self, node) -> Set[str]:
        if node.type == 'identifier':
            return {text(node)}
        found = set()
        for child in node.named_children:
            found.update(self._identifiers(child))
        return found


def build_graph(source, skip_node_types: Iterable[str] = DEFAULT_SKIP_NODE_TYPES) -> DependencyGraph:
    """
    构建依赖图（便捷函数）
    Args:
        source: Script对象、脚本路径或脚本源码
    Returns:
        DependencyGraph
    """
    script = read_script(source, skip_node_types)
    return ScriptGraphBuilder(skip_node_types).build(script)
