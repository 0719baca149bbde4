from callclock.hook_loader import create_profiler, load_config
from callclock.report import format_report

import fibonacci

# profile everything reachable from the example module (writes nothing unless callclock.json sets "report")
profiler = create_profiler(load_config("callclock.json"))
with profiler.session(fibonacci):
    fibonacci.main()

print(format_report(profiler.generate_report()))
