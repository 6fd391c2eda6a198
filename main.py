import simpy
import random
import logging
import os, sys, json

from v2v.Config import Config
from v2v.Node import Node
from v2v.RadioMedium import RadioMedium
from v2v.DeliveryLedger import DeliveryLedger
from v2v.Evaluation import Evaluation, delivery_frame, detection_frame

def get_params(run_idx = 0):
    v = '001'
    params = []

    for per in [0, 0.1]:
        for rep in range(2):
            for num_malicious in [0, 2, 4, 8]:
                for attack_type in ['flood', 'spoof', 'replay', 'sybil', 'timing', 'hello_flood',
                                    'selective_forwarding', 'data_manipulation']:
                    for detection_enabled in [True, False]:
                        params.append({
                            'v': v,
                            'per': per,
                            'rep': rep,
                            'attack_type': attack_type,
                            'detection_enabled': detection_enabled,
                            'num_malicious': num_malicious
                        })
    print(f'running {run_idx} of {len(params)}')
    return params[run_idx]

def monitor(env, ledger, simtime):
    idx = 1
    steps = 10
    while True:
        yield env.timeout(simtime / steps)
        print("Progress: ", f'{idx * 100 / steps:.2f}%')
        idx += 1
        print('Messages in ledger:', len(ledger))

def main(rep = 0, v = '001', attack_type = 'flood', detection_enabled = True, per = 0, num_malicious = 8,
         no_of_nodes = 24, sim_time = 60, sim_size = 1000, transmission_range = 500):

    study_name = f'./res/v{v}'
    os.makedirs(study_name, exist_ok=True)

    fname = f'{attack_type}_d{int(detection_enabled)}_m{num_malicious}_per{int(per*100)}_r{rep}'

    # If results already exist abort
    if os.path.isfile(f'{study_name}/summary-{fname}.json'):
        return

    random.seed(rep + 1)

    base = Config(
        detection_enabled=detection_enabled,
        total_defenders=no_of_nodes - num_malicious,
        total_attackers=num_malicious,
    )

    env = simpy.Environment()
    ledger = DeliveryLedger()
    radio_medium = RadioMedium(env, transmission_range, per)

    env.process(monitor(env, ledger, sim_time))

    nodes = []
    malicious_nodes = []

    for i in range(no_of_nodes):
        x = random.uniform(-sim_size/2, sim_size/2)
        y = random.uniform(-sim_size/2, sim_size/2)
        if (i < num_malicious):
            malicious_nodes.append(i)
            config = base.replace(malicious=True, attack_type=attack_type)
        else:
            config = base
        nodes.append(Node(env, i, sim_size, (x, y), radio_medium, ledger, config))

    summaries = []
    try:
        env.run(until=sim_time)
    finally:
        for n in nodes:
            summaries.append(n.shutdown())

    # all nodes are done, the ledger is final
    snapshot = ledger.snapshot()
    evaluation = Evaluation(snapshot, base.total_defenders, base.total_attackers)

    detection_frame(nodes).write_csv(f'{study_name}/{fname}.csv')
    delivery_frame(snapshot).write_csv(f'{study_name}/delivery-{fname}.csv')

    summary = evaluation.run_summary(summaries)
    summary['malicious_nodes'] = malicious_nodes
    summary['ledger_inconsistencies'] = ledger.inconsistencies
    summary['frames_sent'] = radio_medium.frames_sent
    summary['packets_lost'] = radio_medium.packets_lost
    summary['average_broadcast_delay'] = radio_medium.average_broadcast_delay()
    summary['nodes'] = [evaluation.node_summary(s) for s in summaries]

    with open(f'{study_name}/summary-{fname}.json', 'w') as f:
        json.dump(summary, f)

    return summary


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')
    run_idx = int(sys.argv[1]) if len(sys.argv) > 1 else 0
    offset = int(sys.argv[2]) if len(sys.argv) > 2 else 0
    params = get_params(run_idx + offset)
    main(
        params.get('rep'),
        params.get('v'),
        params.get('attack_type'),
        params.get('detection_enabled'),
        params.get('per'),
        params.get('num_malicious')
    )
