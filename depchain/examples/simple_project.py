from depchain.services.analysis import analyze_graph
from depchain.utils.graph import build_dependency_graph


def create_sample_project():
    # Task durations in days
    durations = {
        "survey": 5,
        "permits": 10,
        "design": 8,
        "utilities": 12,
        "road_works": 15,
        "traffic_plan": 4,
        "signals": 6,
        "handover": 2,
    }

    # Each task lists the tasks it depends on. Design and utilities wait on
    # each other, which makes them one mutually dependent component.
    dependencies = {
        "permits": ["survey"],
        "design": ["survey", "utilities"],
        "utilities": ["permits", "design"],
        "road_works": ["design", "utilities"],
        "traffic_plan": ["survey"],
        "signals": ["traffic_plan", "road_works"],
        "handover": ["signals"],
    }

    graph, task_ids = build_dependency_graph(durations, dependencies)
    analysis = analyze_graph(graph, source=task_ids.index("survey"), weight_model="task")

    def names(component):
        return ", ".join(task_ids[v] for v in component)

    print("Dependency Analysis Report")
    print("==========================")
    print(f"Tasks: {graph.n}, Dependencies: {graph.edge_count()}")

    print("\nMutually dependent task groups:")
    for component in analysis.components:
        if len(component) > 1:
            print(f"  {names(component)}")

    print("\nExecution order:")
    for position, component_index in enumerate(analysis.component_order, 1):
        print(f"  {position}. {names(analysis.components[component_index])}")

    print("\nCritical chain:")
    for component_index in analysis.critical_path.path:
        print(f"  {names(analysis.components[component_index])}")
    print(f"Days until the last task can start: {analysis.critical_path.length}")

    return analysis


if __name__ == "__main__":
    create_sample_project()
