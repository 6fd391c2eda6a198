import numpy as np
import polars as pl


def delivery_threshold(total_defenders):
    # a message counts as delivered once half of the other defenders have it
    # (floor division, so small populations need very few receivers)
    expected_receivers = total_defenders - 1
    return expected_receivers // 2


def percentage(part, whole):
    return part / whole * 100 if whole > 0 else 0.0


def delivery_frame(snapshot):
    """One row per ledger record: message id, sender, send time and number of receivers."""
    ids = sorted(snapshot)
    return pl.DataFrame([
        pl.Series('message_id', ids, dtype=pl.Int64),
        pl.Series('sender_id', [snapshot[i].sender_id for i in ids], dtype=pl.Int64),
        pl.Series('send_time', [snapshot[i].send_time for i in ids], dtype=pl.Float64),
        pl.Series('num_receivers', [len(snapshot[i].receivers) for i in ids], dtype=pl.Int64),
    ])


class Evaluation:
    """
    Read-only aggregation over a finished run.

    Built from a ledger snapshot taken after every node has shut down.
    """

    def __init__(self, snapshot, total_defenders, total_attackers=0):
        self.frame = delivery_frame(snapshot)
        self.total_defenders = total_defenders
        self.total_attackers = total_attackers
        self.threshold = delivery_threshold(total_defenders)

    def delivered(self, frame):
        return frame.filter(pl.col('num_receivers') >= self.threshold).height

    def personal(self, node_id):
        own = self.frame.filter(pl.col('sender_id') == node_id)
        sent = own.height
        delivered = self.delivered(own)
        return {
            'sent': sent,
            'delivered': delivered,
            'pdr': percentage(delivered, sent),
            'packet_loss_ratio': percentage(sent - delivered, sent),
        }

    def personal_pdr(self, node_id):
        return self.personal(node_id)['pdr']

    def network(self):
        sent = self.frame.height
        delivered = self.delivered(self.frame)
        return {
            'total_packets_sent': sent,
            'total_packets_delivered': delivered,
            'pdr': percentage(delivered, sent),
            'total_nodes': self.total_defenders + self.total_attackers,
            'non_attacking_nodes': self.total_defenders,
            'attacking_nodes': self.total_attackers,
        }

    def network_pdr(self):
        return self.network()['pdr']

    def node_summary(self, summary):
        result = dict(summary)
        result.update(self.personal(summary['node_id']))
        return result

    def run_summary(self, summaries):
        defenders = [s for s in summaries if not s['malicious']]
        result = self.network()
        if defenders:
            result['average_delay'] = float(np.mean([s['average_delay'] for s in defenders]))
            result['average_jitter'] = float(np.mean([s['average_jitter'] for s in defenders]))
            result['average_personal_pdr'] = float(np.mean([self.personal_pdr(s['node_id']) for s in defenders]))
        else:
            result['average_delay'] = 0.0
            result['average_jitter'] = 0.0
            result['average_personal_pdr'] = 0.0
        result['total_detections'] = int(np.sum([s['total_detections'] for s in summaries]))
        result['packets_blocked'] = int(np.sum([s['packets_blocked'] for s in summaries]))
        result['evasive_actions_taken'] = int(np.sum([s['evasive_actions_taken'] for s in summaries]))
        return result


def detection_frame(nodes):
    events = []
    for n in nodes:
        events += n.application.detection_events
    if not events:
        return pl.DataFrame(schema={
            'detected_at': pl.Float64,
            'detected_by': pl.Int64,
            'detected_node': pl.Int64,
            'reason': pl.Utf8,
            'rate': pl.Int64,
        })
    return pl.DataFrame(events)
