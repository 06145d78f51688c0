import os, argparse, sys, zipfile
from scipy.io.matlab import MatReadError

from .errors import SnowGraphError
from .io import load_graph, save_graph, node_table
from .logger import configure, get_logger
from .reduce import reduce_graph_with_report

def main(argv=None):
    ap = argparse.ArgumentParser(description="Reduce the Soho cholera graph to its cholera and pump nodes")
    ap.add_argument("input", help="Graph file (.mat from snow_gis() or .npz)")
    ap.add_argument("--out", required=True, help="Output graph file (.mat or .npz)")
    ap.add_argument("--nodes-csv", default=None, help="Optional CSV with one row per reduced node")
    ap.add_argument("--n-jobs", type=int, default=1, help="Parallel shortest-path workers (-1 = all cores)")
    ap.add_argument("--graph-var", default="G")
    ap.add_argument("--x-var", default="x")
    ap.add_argument("--b-var", default="b")
    ap.add_argument("--log-level", default=None, help="Overrides SNOW_GSP_LOG_LEVEL")
    ap.add_argument("--progress", action="store_true")
    args = ap.parse_args(argv)

    configure(args.log_level)
    log = get_logger("snow_gsp.cli")
    try:
        kwargs = {}
        if args.input.lower().endswith(".mat"):
            kwargs = dict(graph_var=args.graph_var, x_var=args.x_var, b_var=args.b_var)
        G, x, b = load_graph(args.input, **kwargs)
        G_red, x_red, b_red, report = reduce_graph_with_report(G, x, b, n_jobs=args.n_jobs, progress=args.progress)
        out_dir = os.path.dirname(args.out)
        if out_dir: os.makedirs(out_dir, exist_ok=True)
        save_graph(args.out, G_red, x_red, b_red)
        print("Saved:", args.out)
        if args.nodes_csv:
            csv_dir = os.path.dirname(args.nodes_csv)
            if csv_dir: os.makedirs(csv_dir, exist_ok=True)
            df = node_table(G_red, x_red, b_red)
            df.insert(1, "original_node", report.kept)
            df.to_csv(args.nodes_csv, index=False)
            print("Saved:", args.nodes_csv)
    except (SnowGraphError, OSError, ValueError, zipfile.BadZipFile, MatReadError) as e:
        log.error(f"{type(e).__name__}: {e}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
