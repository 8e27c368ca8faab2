import itertools

import matplotlib

matplotlib.use("Agg")

import pytest

from museum_insights.records import MuseumRecord


_ids = itertools.count(1)


def make_record(museum_type="Art", income=0.0, revenue=0.0, *, name=None, city="Boston", state="MA"):
    n = next(_ids)
    return MuseumRecord(
        museum_id=f"M{n:05d}",
        legal_name=name or f"Museum {n}",
        museum_type=museum_type,
        city=city,
        state=state,
        zip_code="02115",
        income=float(income),
        revenue=float(revenue),
    )


@pytest.fixture
def art_zoo_records():
    return [
        make_record("Art", 100, 50),
        make_record("Art", 200, 150),
        make_record("Zoo", 10, 5),
    ]


RAW_HEADER = ("Museum ID,Museum Name,Legal Name,Museum Type,"
              "City (Administrative Location),State (Administrative Location),"
              "Zip Code (Administrative Location),Income,Revenue\n")


@pytest.fixture
def raw_csv(tmp_path):
    rows = [
        "8400100001,Fine Arts,Fine Arts Trust,ART MUSEUM,Boston,MA,02115,1000,800",
        "8400100002,Science Hall,Science Hall Inc,SCIENCE & TECHNOLOGY MUSEUM OR PLANETARIUM,Boston,MA,02114,5000,4500",
        "8400100003,Small Art,Small Art Society,ART MUSEUM,  New   York ,NY,10001,200,100",
        "8400100004,No Money,No Money Society,HISTORY MUSEUM,Albany,NY,12207,,",
        "8400100005,Debt Museum,Debt Museum Inc,HISTORY MUSEUM,Albany,NY,12207,-5,10",
        "8400100006,Fine Arts Annex,Fine Arts Trust,ART MUSEUM,Boston,MA,02115,30,20",
        "8400100007,Quiet Zoo,Quiet Zoo Inc,ZOO AQUARIUM OR WILDLIFE CONSERVATION,Austin,TX,78701,0,0",
    ]
    path = tmp_path / "museums.csv"
    path.write_text(RAW_HEADER + "\n".join(rows) + "\n")
    return path
